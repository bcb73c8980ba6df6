from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import openpyxl

from flight_scheduler.domain.crew import ROLES, CrewMember
from flight_scheduler.preprocessing.dates import DateFormatError, date_label
from flight_scheduler.preprocessing.loaders import can_fly, clean_name, normalize_role

# 1-based sheet columns
RANK_COL = 2
LAST_NAME_COL = 3
FIRST_NAME_COL = 4
FIRST_DATE_COL = 6

SECTION_HEADERS = {f"{r}S" for r in ROLES}   # "PCS", "PIS", ...


def read_date_columns(ws, header_row: int) -> Dict[int, str]:
    """
    Map sheet column -> canonical date label for every date in the header row.
    Blank cells are skipped; any other unreadable value raises DateFormatError.
    """
    cols: Dict[int, str] = {}
    for c in range(FIRST_DATE_COL, ws.max_column + 1):
        v = ws.cell(header_row, c).value
        if v is None or str(v).strip() == "":
            continue
        try:
            cols[c] = date_label(v)
        except DateFormatError as e:
            raise DateFormatError(f"{e} in header cell {ws.cell(header_row, c).coordinate}") from None
    return cols


def load_crew_from_xlsx(
    path: Path,
    sheet: Optional[str] = None,
    header_row: int = 1,
) -> List[CrewMember]:
    """
    Read crew availability from a roster workbook.

    Layout (one sheet; the last one unless `sheet` is given):
      - `header_row` holds one date per column from column F onwards
      - a row whose first cell is "PCs" / "PIs" / "FEs" / "CEs" opens that
        role's section
      - crew rows: B = rank, C = last name, D = first name, then one
        roster code per date column ("", "F" or "AMR" mean can fly)
      - blank rows before the first section are skipped; after it, the
        first row with an empty first cell ends the table

    Raises ValueError when no crew row is found.
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing file: {path}")

    wb = openpyxl.load_workbook(path, data_only=True)
    if sheet is not None:
        if sheet not in wb.sheetnames:
            raise ValueError(f"Missing sheet '{sheet}' in {path}")
        ws = wb[sheet]
    else:
        ws = wb[wb.sheetnames[-1]]

    date_cols = read_date_columns(ws, header_row)
    if not date_cols:
        raise ValueError(f"No date columns found in row {header_row} of {path}")

    crew: List[CrewMember] = []
    current_role: Optional[str] = None

    for r in range(header_row + 1, ws.max_row + 1):
        first = ws.cell(r, 1).value
        first = "" if first is None else str(first).strip()

        if first.upper() in SECTION_HEADERS:
            current_role = normalize_role(first)
            continue
        if not first:
            if current_role is None:
                continue
            break
        if current_role is None:
            raise ValueError(f"Crew row {r} appears before any role section in {path}")

        availability = {label: can_fly(ws.cell(r, c).value) for c, label in date_cols.items()}
        crew.append(
            CrewMember(
                first_name=clean_name(ws.cell(r, FIRST_NAME_COL).value),
                last_name=clean_name(ws.cell(r, LAST_NAME_COL).value),
                role=current_role,
                rank=clean_name(ws.cell(r, RANK_COL).value),
                availability=availability,
            )
        )

    if not crew:
        raise ValueError(f"No crew rows found in {path}")
    return crew
