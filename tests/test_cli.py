"""Tests for the command-line interface."""

import json

import pytest

from stagerota.cli import EXIT_BAD_INPUT, EXIT_OK, create_sample_week, main
from stagerota.domain.models import Assignment, Role


@pytest.fixture
def shows_file(tmp_path):
    path = tmp_path / "shows.json"
    shows = [s.to_dict() for s in create_sample_week()[:3]]
    path.write_text(json.dumps({"shows": shows}))
    return path


class TestSampleWeek:
    """Tests for the built-in sample week."""

    def test_layout(self):
        shows = create_sample_week()
        assert len(shows) == 8
        assert sum(1 for s in shows if s.is_performance) == 6
        assert [s.id for s in shows if not s.is_performance] == ["travel1", "dayoff1"]


class TestGenerateCommand:
    """Tests for `stagerota generate`."""

    def test_writes_schedule(self, shows_file, tmp_path, capsys):
        output = tmp_path / "rota.json"
        code = main(["generate", str(shows_file), "--seed", "4", "-o", str(output)])

        assert code == EXIT_OK
        data = json.loads(output.read_text())
        assert data["success"] is True
        roles = [a for a in data["assignments"] if a["role"] != "OFF"]
        assert len(roles) == 24
        assert "written to" in capsys.readouterr().out

    def test_prints_to_stdout(self, shows_file, capsys):
        code = main(["generate", str(shows_file), "--seed", "4"])
        assert code == EXIT_OK
        assert json.loads(capsys.readouterr().out)["success"] is True

    def test_custom_cast_file(self, shows_file, tmp_path, capsys):
        cast_file = tmp_path / "cast.json"
        cast_file.write_text(json.dumps([{"name": "anna", "eligibleRoles": ["Sarge"]}]))
        code = main(["generate", str(shows_file), "--cast", str(cast_file), "-a", "2"])
        assert code == 1
        data = json.loads(capsys.readouterr().out)
        assert data["success"] is False
        assert {a["performer"] for a in data["assignments"]} == {"ANNA"}

    def test_missing_file(self, tmp_path, capsys):
        code = main(["generate", str(tmp_path / "nope.json")])
        assert code == EXIT_BAD_INPUT
        assert "Error:" in capsys.readouterr().err

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "shows.json"
        path.write_text(json.dumps({"other": []}))
        assert main(["generate", str(path)]) == EXIT_BAD_INPUT


class TestValidateCommand:
    """Tests for `stagerota validate`."""

    def test_valid_schedule(self, shows_file, tmp_path, capsys):
        output = tmp_path / "rota.json"
        main(["generate", str(shows_file), "--seed", "4", "-o", str(output)])
        capsys.readouterr()

        code = main(["validate", str(shows_file), str(output)])
        assert code == EXIT_OK
        assert "PASSED" in capsys.readouterr().out

    def test_invalid_schedule_as_json(self, shows_file, tmp_path, capsys):
        assignments = tmp_path / "rota.json"
        rows = [Assignment("show1", Role.WHO, "PHIL").to_dict()]
        assignments.write_text(json.dumps(rows))

        code = main(["validate", str(shows_file), str(assignments), "--json"])
        assert code == 1
        data = json.loads(capsys.readouterr().out)
        assert data["isValid"] is False
        assert any("PHIL cannot perform Who" in e for e in data["errors"])

    def test_comprehensive_report(self, shows_file, tmp_path, capsys):
        output = tmp_path / "rota.json"
        main(["generate", str(shows_file), "--seed", "4", "-o", str(output)])
        capsys.readouterr()

        code = main(["validate", str(shows_file), str(output), "--comprehensive"])
        assert code == EXIT_OK
        assert "Overall score:" in capsys.readouterr().out


class TestDemoCommand:
    """Tests for `stagerota demo`."""

    def test_demo_runs(self, capsys):
        code = main(["demo", "--seed", "42"])
        out = capsys.readouterr().out
        assert code in (0, 1)
        assert "Generating demo schedule for 12 performers..." in out
        assert "Score:" in out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()
