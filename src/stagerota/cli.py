"""Command-line interface for the stagerota cast scheduling tool."""

import argparse
import json
import logging
import random
import sys
from datetime import date, time
from pathlib import Path
from typing import Optional

from stagerota.domain.models import (
    Assignment,
    CastMember,
    Show,
    ShowStatus,
    load_assignments,
    load_cast,
    load_shows,
)
from stagerota.domain.policies import SchedulerConfig, SolverType
from stagerota.domain.roster import DEFAULT_CAST
from stagerota.scheduling.scheduler import Scheduler
from stagerota.validation.validator import ScheduleValidator

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_INPUT = 2


def create_sample_week() -> list[Show]:
    """Create a touring week with a travel day and a day off."""
    return [
        Show("show1", date(2024, 10, 15), time(19, 0), time(18, 0)),
        Show("show2", date(2024, 10, 16), time(19, 0), time(18, 0)),
        Show("show3", date(2024, 10, 17), time(19, 0), time(18, 0)),
        Show("travel1", date(2024, 10, 18), time(10, 0), time(9, 0), ShowStatus.TRAVEL),
        Show("show4", date(2024, 10, 19), time(14, 0), time(12, 0)),
        Show("show5", date(2024, 10, 19), time(19, 0), time(17, 0)),
        Show("dayoff1", date(2024, 10, 20), time(0, 0), None, ShowStatus.DAY_OFF),
        Show("show6", date(2024, 10, 21), time(16, 0), time(14, 30)),
    ]


def _read_json(path: str, key: str) -> list[dict]:
    """Read a JSON list, or an object wrapping the list under ``key``."""
    data = json.loads(Path(path).read_text())
    if isinstance(data, dict):
        data = data.get(key)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of {key}")
    return data


def _load_cast_option(path: Optional[str]) -> list[CastMember]:
    if path is None:
        return list(DEFAULT_CAST)
    return load_cast(_read_json(path, "castMembers"))


def print_schedule(shows: list[Show], assignments: list[Assignment]) -> None:
    """Print one line per performance with its role holders."""
    by_show: dict[str, list[Assignment]] = {}
    for a in assignments:
        by_show.setdefault(a.show_id, []).append(a)

    for show in shows:
        if not show.is_performance:
            print(f"  {show.date.isoformat()}  {show.status.value.upper()}")
            continue
        rows = by_show.get(show.id, [])
        cast_line = ", ".join(
            f"{a.role_label}={a.performer}" for a in rows if not a.is_off
        )
        red = [a.performer for a in rows if a.is_off and a.is_red_day]
        print(f"  {show.label}: {cast_line}")
        if red:
            print(f"      RED: {', '.join(red)}")


def print_validation(result, limit: int = 5) -> None:
    if result.is_valid:
        print("\n  Validation: PASSED")
    else:
        print(f"\n  Validation: FAILED ({len(result.errors)} errors)")
        for error in result.error_messages[:limit]:
            print(f"    - {error}")
        if len(result.errors) > limit:
            print(f"    ... and {len(result.errors) - limit} more errors")

    if result.warnings:
        print(f"\n  Warnings ({len(result.warnings)}):")
        for warning in result.warning_messages[:limit]:
            print(f"    - {warning}")
        if len(result.warnings) > limit:
            print(f"    ... and {len(result.warnings) - limit} more warnings")


def run_generate(args: argparse.Namespace) -> int:
    shows = load_shows(_read_json(args.shows, "shows"))
    cast = _load_cast_option(args.cast)

    config = SchedulerConfig(
        max_attempts=args.attempts,
        solver_type=SolverType(args.solver),
    )
    scheduler = Scheduler(config=config, rng=random.Random(args.seed))
    result = scheduler.generate(shows, cast)

    payload = json.dumps(result.to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(payload + "\n")
        status = "complete" if result.success else "incomplete"
        print(f"Schedule {status}: {len(result.role_assignments)} role assignments "
              f"written to {args.output}")
        for error in result.errors:
            print(f"  - {error}")
    else:
        print(payload)

    return EXIT_OK if result.success else EXIT_FAILED


def run_validate(args: argparse.Namespace) -> int:
    shows = load_shows(_read_json(args.shows, "shows"))
    assignments = load_assignments(_read_json(args.assignments, "assignments"))
    cast = _load_cast_option(args.cast)
    validator = ScheduleValidator()

    if args.comprehensive:
        report = validator.validate_comprehensive(shows, assignments, cast)
        if args.json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            print(f"Overall score: {report.overall_score}/100")
            print(f"Completion: {report.completion_percentage}%")
            print(f"Issues: {len(report.issues)} "
                  f"({len(report.critical_errors)} critical, {len(report.warnings)} warnings)")
            for issue in report.issues:
                print(f"  [{issue.severity.value}] {issue}")
            if report.recommendations:
                print("\nRecommendations:")
                for recommendation in report.recommendations:
                    print(f"  - {recommendation}")
        return EXIT_OK if report.is_valid else EXIT_FAILED

    result = validator.validate(shows, assignments, cast)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_validation(result, limit=len(result.errors) + len(result.warnings))
    return EXIT_OK if result.is_valid else EXIT_FAILED


def run_demo(seed: Optional[int] = None) -> int:
    """Generate and validate a schedule for the sample week."""
    shows = create_sample_week()
    cast = list(DEFAULT_CAST)
    print(f"Generating demo schedule for {len(cast)} performers...")

    scheduler = Scheduler(rng=random.Random(seed))
    result = scheduler.generate(shows, cast)

    print(f"\nSchedule {'generated' if result.success else 'incomplete'} "
          f"after {result.attempts} attempts")
    print_schedule(shows, result.assignments)
    for error in result.errors:
        print(f"  - {error}")

    report = ScheduleValidator().validate_comprehensive(shows, result.assignments, cast)
    print(f"\n  Score: {report.overall_score}/100")
    print_validation(ScheduleValidator().validate(shows, result.assignments, cast))
    return EXIT_OK if result.success else EXIT_FAILED


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="stagerota - Cast Rota Scheduling Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                               Run demo for the sample week
  %(prog)s generate shows.json -o rota.json   Generate a schedule
  %(prog)s generate shows.json --solver cpsat Use the CP-SAT solver
  %(prog)s validate shows.json rota.json      Check a schedule
  %(prog)s validate shows.json rota.json --comprehensive --json
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show progress logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    generate_parser = subparsers.add_parser("generate", help="Generate a cast schedule")
    generate_parser.add_argument("shows", help="JSON file with the week's shows")
    generate_parser.add_argument(
        "--cast", "-c",
        type=str,
        help="JSON file with the cast list (default: built-in touring company)",
    )
    generate_parser.add_argument(
        "--seed", "-s",
        type=int,
        help="Random seed for repeatable schedules",
    )
    generate_parser.add_argument(
        "--attempts", "-a",
        type=int,
        default=SchedulerConfig.max_attempts,
        help=f"Randomized attempts before the partial pass (default: {SchedulerConfig.max_attempts})",
    )
    generate_parser.add_argument(
        "--solver",
        type=str,
        default=SolverType.HEURISTIC.value,
        choices=[t.value for t in SolverType],
        help="Solver backend (default: heuristic)",
    )
    generate_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output JSON file path (default: print to stdout)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate a cast schedule")
    validate_parser.add_argument("shows", help="JSON file with the week's shows")
    validate_parser.add_argument("assignments", help="JSON file with the assignments")
    validate_parser.add_argument(
        "--cast", "-c",
        type=str,
        help="JSON file with the cast list (default: built-in touring company)",
    )
    validate_parser.add_argument(
        "--comprehensive",
        action="store_true",
        help="Run the full analysis and score the schedule",
    )
    validate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    demo_parser = subparsers.add_parser("demo", help="Run demo schedule generation")
    demo_parser.add_argument(
        "--seed", "-s",
        type=int,
        help="Random seed for repeatable schedules",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "generate":
            return run_generate(args)
        elif args.command == "validate":
            return run_validate(args)
        elif args.command == "demo":
            return run_demo(args.seed)
        else:
            parser.print_help()
            return EXIT_FAILED
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
