from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from flight_scheduler.domain.crew import CrewMember
from flight_scheduler.preprocessing.dates import DAYS_PER_WEEK, date_label, week_dates


DEFAULT_NORMAL_FLIGHTS = 3

# Roster codes meaning the crew member can fly; anything else is busy.
CAN_FLY_CODES = {"", "F", "AMR"}


@dataclass(frozen=True)
class Scenario:
    start_date: str
    days: int
    default_normal_flights: int
    normal_flights: Dict[str, int]   # canonical date label -> count


def _read_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Missing file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def normalize_role(raw: str) -> str:
    """'PCs' (roster section header) and 'pc' both become 'PC'."""
    role = str(raw).strip().upper()
    if len(role) == 3 and role.endswith("S"):
        role = role[:-1]
    return role


def clean_name(raw: Any) -> str:
    return str(raw if raw is not None else "").replace("*", "").strip()


def can_fly(value: Any) -> bool:
    """
    Booleans pass through. None is an empty roster cell (openpyxl reads
    blank cells as None) and counts as "". Codes are matched exactly, so
    "f" or "F " are busy.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return True
    return str(value) in CAN_FLY_CODES


def parse_crew_entry(c: Dict[str, Any]) -> CrewMember:
    availability = {
        date_label(d): can_fly(v)
        for d, v in dict(c.get("availability", {})).items()
    }
    return CrewMember(
        first_name=clean_name(c["first_name"]),
        last_name=clean_name(c["last_name"]),
        role=normalize_role(c["role"]),
        rank=str(c.get("rank", "")).strip(),
        availability=availability,
    )


def load_crew(path: Path) -> List[CrewMember]:
    obj = _read_json(path)
    return [parse_crew_entry(c) for c in obj.get("crew", [])]


def load_scenario(path: Path) -> Scenario:
    obj = _read_json(path)
    return Scenario(
        start_date=date_label(obj["start_date"]),
        days=int(obj.get("days", DAYS_PER_WEEK)),
        default_normal_flights=int(obj.get("default_normal_flights", DEFAULT_NORMAL_FLIGHTS)),
        normal_flights={
            date_label(d): int(n) for d, n in dict(obj.get("normal_flights", {})).items()
        },
    )


def scenario_dates(scenario: Scenario) -> List[str]:
    return week_dates(scenario.start_date, scenario.days)


def normal_flights_by_date(scenario: Scenario) -> Dict[str, int]:
    return {
        d: scenario.normal_flights.get(d, scenario.default_normal_flights)
        for d in scenario_dates(scenario)
    }
