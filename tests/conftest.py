from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from flight_scheduler.domain.crew import CrewMember
from flight_scheduler.preprocessing.dates import week_dates


WEEK_START = "1/2/2006"


@pytest.fixture
def week() -> List[str]:
    return week_dates(WEEK_START)


def make_crew(
    first: str,
    last: str,
    role: str,
    dates: List[str],
    unavailable: Optional[List[str]] = None,
    rank: str = "",
) -> CrewMember:
    off = set(unavailable or [])
    return CrewMember(
        first_name=first,
        last_name=last,
        role=role,
        rank=rank,
        availability={d: d not in off for d in dates},
    )


@pytest.fixture
def small_crew(week) -> List[CrewMember]:
    """One PC, one PI, one FE and three CEs, available all week."""
    return [
        make_crew("Alice", "Smith", "PC", week, rank="CPT"),
        make_crew("Pete", "Jones", "PI", week, rank="1LT"),
        make_crew("Fred", "Brown", "FE", week, rank="SSG"),
        make_crew("Cam", "One", "CE", week, rank="SGT"),
        make_crew("Cam", "Two", "CE", week, rank="SGT"),
        make_crew("Cam", "Three", "CE", week, rank="SGT"),
    ]


def write_instance(
    inst_dir: Path,
    crew: List[Dict],
    start_date: str = WEEK_START,
    default_normal_flights: int = 0,
    normal_flights: Optional[Dict[str, int]] = None,
) -> Path:
    inst_dir.mkdir(parents=True, exist_ok=True)
    (inst_dir / "crew.json").write_text(json.dumps({"crew": crew}), encoding="utf-8")
    scenario = {
        "start_date": start_date,
        "days": 7,
        "default_normal_flights": default_normal_flights,
        "normal_flights": normal_flights or {},
    }
    (inst_dir / "scenario.json").write_text(json.dumps(scenario), encoding="utf-8")
    return inst_dir
