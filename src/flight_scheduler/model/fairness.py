from __future__ import annotations

from typing import Dict, Optional, Set

from flight_scheduler.domain.crew import ROLES, CrewMember


ROTATION_RESET_RATIO = 0.9


class RotationTracker:
    """
    Per-run bookkeeping for the no-double-booking rule and the rotation
    heuristic that spreads flights across crew of the same role.

    - `flown_today`: names already assigned on the date being processed.
      Cleared whenever the processed date changes.
    - `window[role]`: names of that role assigned in the current rotation
      window. A name in the window is not picked again for its role until
      a reset clears the window.

    Resets run after every recorded assignment:
      1. if the window sets together hold exactly as many names as there
         are roles, every window is cleared;
      2. for each role, if 90% of the role's roster size is >= the window
         size, that role's window is cleared.

    One tracker belongs to one allocation run and is never reused.
    """

    def __init__(self, roster_sizes: Dict[str, int]) -> None:
        self.roster_sizes: Dict[str, int] = {r: int(roster_sizes.get(r, 0)) for r in ROLES}
        self.window: Dict[str, Set[str]] = {r: set() for r in ROLES}
        self.flown_today: Set[str] = set()
        self.current_date: Optional[str] = None

    def start_slot(self, date: str) -> None:
        if date != self.current_date:
            self.flown_today.clear()
        self.current_date = date

    def is_blocked(self, crew: CrewMember) -> bool:
        return crew.name in self.flown_today or crew.name in self.window[crew.role]

    def record(self, crew: CrewMember) -> None:
        self.flown_today.add(crew.name)
        self.window[crew.role].add(crew.name)
        self.apply_resets()

    def apply_resets(self) -> None:
        if sum(len(names) for names in self.window.values()) == len(self.window):
            for names in self.window.values():
                names.clear()

        for role in ROLES:
            if ROTATION_RESET_RATIO * self.roster_sizes[role] >= len(self.window[role]):
                self.window[role].clear()

    def snapshot(self) -> Dict[str, Set[str]]:
        return {r: set(names) for r, names in self.window.items()}
