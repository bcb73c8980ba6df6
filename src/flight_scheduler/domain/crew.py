from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


ROLES: Tuple[str, ...] = ("PC", "PI", "FE", "CE")


def crew_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"


@dataclass(frozen=True)
class CrewMember:
    """
    Represents a single crew member and their availability for the week.

    A CrewMember is read-only to the allocation engine. The order in which
    crew members are handed to the engine is their priority order: earlier
    entries get first claim on a role in a flight.

    Attributes
    ----------
    first_name : str
        Given name, with roster markers (e.g. "*") already stripped.
    last_name : str
        Family name.
    role : str
        One of PC, PI, FE, CE. Decides which field of a flight
        the crew member can fill.
    rank : str
        Rank label carried through to the exported schedule.
    availability : Dict[str, bool]
        Availability keyed by canonical date label ("Jan 02 06").
        A date with no entry means the crew member cannot fly that day.
    """
    first_name: str
    last_name: str
    role: str            # "PC", "PI", "FE" or "CE"
    rank: str = ""
    availability: Dict[str, bool] = field(default_factory=dict, compare=False, hash=False)

    @property
    def name(self) -> str:
        return crew_name(self.first_name, self.last_name)

    def is_available(self, date_label: str) -> bool:
        return bool(self.availability.get(date_label, False))
