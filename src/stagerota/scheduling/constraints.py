"""Hard constraints for placing a performer in a show.

Every check is a pure predicate over the current ``AssignmentStore`` and a
candidate (performer, show) pair. A placement is legal only if all checks
pass.
"""

from collections import Counter
from typing import Optional

from stagerota.domain.models import CastMember, Role
from stagerota.domain.policies import DefaultFatiguePolicy, FatiguePolicy
from stagerota.domain.timeline import ShowTimeline
from stagerota.scheduling.assignment_store import AssignmentStore

SATURDAY = 5
SUNDAY = 6


class ConstraintChecker:
    """Evaluates placement rules against an in-progress schedule.

    Checks:
    1. Eligibility: the performer is trained for the role
    2. Exclusivity: the performer holds no other role in the show
    3. Consecutive ceiling: no run longer than the policy allows
    4. Weekend double-double: no two-show Saturday followed by a two-show Sunday
    5. Weekly cap: fewer than the maximum number of shows so far
    """

    ELIGIBILITY = "eligibility"
    EXCLUSIVITY = "exclusivity"
    CONSECUTIVE = "consecutive_shows"
    WEEKEND = "weekend_double_double"
    WEEKLY_CAP = "weekly_cap"

    def __init__(
        self,
        timeline: ShowTimeline,
        cast: list[CastMember],
        policy: Optional[FatiguePolicy] = None,
    ):
        self.timeline = timeline
        self.policy = policy or DefaultFatiguePolicy()
        self.cast_map: dict[str, CastMember] = {m.name: m for m in cast}

    def is_eligible(self, performer: str, role: Role) -> bool:
        member = self.cast_map.get(performer)
        return member is not None and member.can_play(role)

    def is_free_in_show(
        self, store: AssignmentStore, performer: str, show_id: str
    ) -> bool:
        return performer not in store.performers_in(show_id)

    def within_consecutive_limit(
        self, store: AssignmentStore, performer: str, show_id: str
    ) -> bool:
        """Check the longest run stays within the ceiling after placement."""
        ordinals = [self.timeline.index_of(s) for s in store.show_ids_for(performer)]
        ordinals.append(self.timeline.index_of(show_id))
        return self.timeline.longest_run(ordinals) <= self.policy.max_consecutive_shows()

    def avoids_weekend_double_double(
        self, store: AssignmentStore, performer: str, show_id: str
    ) -> bool:
        """Reject a two-show Saturday directly followed by a two-show Sunday.

        Adjacency is by day of week among the performer's double-show days,
        not by date distance.
        """
        show_ids = set(store.show_ids_for(performer))
        show_ids.add(show_id)
        per_date = Counter(self.timeline.get(s).date for s in show_ids)
        doubles = sorted(d for d, count in per_date.items() if count >= 2)

        for earlier, later in zip(doubles, doubles[1:]):
            if earlier.weekday() == SATURDAY and later.weekday() == SUNDAY:
                return False
        return True

    def under_weekly_cap(self, store: AssignmentStore, performer: str) -> bool:
        return store.show_count(performer) < self.policy.max_shows_per_week()

    def violations(
        self,
        store: AssignmentStore,
        performer: str,
        show_id: str,
        role: Role,
    ) -> list[str]:
        """Names of every check the placement would fail."""
        failed = []
        if not self.is_eligible(performer, role):
            failed.append(self.ELIGIBILITY)
        if not self.is_free_in_show(store, performer, show_id):
            failed.append(self.EXCLUSIVITY)
            # Remaining checks assume the performer is not yet in the show
            return failed
        if not self.within_consecutive_limit(store, performer, show_id):
            failed.append(self.CONSECUTIVE)
        if not self.avoids_weekend_double_double(store, performer, show_id):
            failed.append(self.WEEKEND)
        if not self.under_weekly_cap(store, performer):
            failed.append(self.WEEKLY_CAP)
        return failed

    def can_assign(
        self,
        store: AssignmentStore,
        performer: str,
        show_id: str,
        role: Role,
    ) -> bool:
        """Check every rule, stopping at the first failure."""
        return (
            self.is_eligible(performer, role)
            and self.is_free_in_show(store, performer, show_id)
            and self.under_weekly_cap(store, performer)
            and self.within_consecutive_limit(store, performer, show_id)
            and self.avoids_weekend_double_double(store, performer, show_id)
        )

    def eligible_count(self, role: Role) -> int:
        """Number of cast members trained for a role."""
        return sum(1 for m in self.cast_map.values() if m.can_play(role))
