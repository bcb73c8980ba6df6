from __future__ import annotations

from typing import Sequence

from flight_scheduler.domain.crew import ROLES, CrewMember
from flight_scheduler.preprocessing.loaders import Scenario, scenario_dates


def validate_crew(crew: Sequence[CrewMember]) -> None:
    if not crew:
        raise ValueError("No crew members to schedule")

    names = [c.name for c in crew]
    if len(set(names)) != len(names):
        dupes = sorted({n for n in names if names.count(n) > 1})
        raise ValueError(f"Duplicate crew names found: {dupes}")

    for c in crew:
        if not c.first_name or not c.last_name:
            raise ValueError(f"Crew member with empty name: {c!r}")
        if c.role not in ROLES:
            raise ValueError(f"Invalid role for crew {c.name}: {c.role}")


def validate_scenario(scenario: Scenario) -> None:
    if scenario.days <= 0:
        raise ValueError(f"days must be > 0, got {scenario.days}")
    if scenario.default_normal_flights < 0:
        raise ValueError("default_normal_flights must be >= 0")

    dates = set(scenario_dates(scenario))
    for d, n in scenario.normal_flights.items():
        if d not in dates:
            raise ValueError(f"normal_flights date {d} is outside the scheduled range")
        if n < 0:
            raise ValueError(f"Negative normal flight count for {d}: {n}")
