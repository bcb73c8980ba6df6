from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import openpyxl
from openpyxl.styles import Font

from flight_scheduler.domain.crew import CrewMember
from flight_scheduler.domain.flight import FlightSlot, Schedule


SHEET_NAME = "Flights"
SHEET_HEADING = [
    "Date",
    "Flight Type",
    "Time",
    "Status",
    "Rank",
    "First Name",
    "Last Name",
]
PLACEHOLDER = "-"


def _crew_row(c: CrewMember) -> List[str]:
    return [PLACEHOLDER, PLACEHOLDER, PLACEHOLDER, c.role, c.rank, c.first_name, c.last_name]


def export_schedule_xlsx(schedule: Schedule, path: Path) -> Path:
    """
    Write the schedule as one "Flights" sheet: a row per flight
    (date, type, time) followed by one row per assigned crew member.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_NAME

    ws.append(SHEET_HEADING)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for slot in schedule:
        ws.append([slot.date, slot.flight_type, slot.time])
        for c in slot.crew():
            ws.append(_crew_row(c))

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def _crew_json(c: Optional[CrewMember]) -> Optional[Dict[str, str]]:
    if c is None:
        return None
    return {"name": c.name, "rank": c.rank, "role": c.role}


def slot_to_json(slot: FlightSlot) -> Dict[str, Any]:
    return {
        "index": slot.index,
        "date": slot.date,
        "position": slot.position,
        "type": slot.flight_type,
        "time": slot.time,
        "PC": _crew_json(slot.pc),
        "PIs": [_crew_json(c) for c in slot.pis],
        "FE": _crew_json(slot.fe),
        "CEs": [_crew_json(c) for c in slot.ces],
    }


def schedule_to_json(schedule: Schedule) -> Dict[str, Any]:
    return {
        "dates": schedule.dates,
        "flights": [slot_to_json(s) for s in schedule],
    }
