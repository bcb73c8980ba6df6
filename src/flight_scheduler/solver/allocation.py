from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence, Tuple

from flight_scheduler.domain.crew import ROLES, CrewMember
from flight_scheduler.domain.flight import FlightSlot, Schedule
from flight_scheduler.model.fairness import RotationTracker
from flight_scheduler.model.occupancy import is_full, missing


def roster_sizes(crew: Sequence[CrewMember]) -> Dict[str, int]:
    counts = Counter(c.role for c in crew)
    return {r: counts.get(r, 0) for r in ROLES}


class Allocator:
    """
    Greedy single-pass crew allocation.

    Slots are visited in schedule order and, for each slot, crew in the
    order given (earlier crew have priority). A crew member takes the next
    open seat of their role unless they are unavailable that date, already
    flew that date, sit in their role's rotation window, or the role is
    full on the slot. There is no backtracking: seats nobody can take stay
    empty.

    An Allocator holds the state of one run. Build a new one to rerun.
    """

    def __init__(self, crew: Sequence[CrewMember]) -> None:
        unknown = sorted({c.role for c in crew if c.role not in ROLES})
        if unknown:
            raise ValueError(f"Unknown crew roles: {unknown}")
        self.crew: List[CrewMember] = list(crew)
        self.tracker = RotationTracker(roster_sizes(self.crew))
        self._done = False

    def _fill_slot(self, slot: FlightSlot) -> None:
        self.tracker.start_slot(slot.date)
        for c in self.crew:
            if not c.is_available(slot.date) or self.tracker.is_blocked(c):
                continue
            if is_full(c.role, slot):
                continue
            slot.assign(c)
            self.tracker.record(c)

    def run(self, schedule: Schedule) -> Schedule:
        if self._done:
            raise RuntimeError("Allocator already ran; create a new one for another run")
        self._done = True
        for slot in schedule:
            self._fill_slot(slot)
        return schedule


def allocate(schedule: Schedule, crew: Sequence[CrewMember]) -> Schedule:
    """Fill `schedule` in place from `crew` (priority order) and return it."""
    return Allocator(crew).run(schedule)


def unfilled_positions(schedule: Schedule) -> List[Tuple[int, str, int]]:
    """(slot index, role, seats left empty) for every under-staffed role."""
    out: List[Tuple[int, str, int]] = []
    for slot in schedule:
        for role in ROLES:
            n = missing(role, slot)
            if n > 0:
                out.append((slot.index, role, n))
    return out
