from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

from flight_scheduler.domain.crew import CrewMember
from flight_scheduler.preprocessing.availability_xlsx import load_crew_from_xlsx
from flight_scheduler.preprocessing.loaders import (
    load_crew,
    load_scenario,
    normal_flights_by_date,
    scenario_dates,
)
from flight_scheduler.preprocessing.validate_crew import validate_crew, validate_scenario
from flight_scheduler.model.slot_generator import generate_schedule
from flight_scheduler.solver.allocation import allocate, unfilled_positions
from flight_scheduler.visualization.export import export_schedule_xlsx, schedule_to_json
from flight_scheduler.visualization.report import build_report_frames, save_plots, save_tables


SCHEDULE_XLSX = "FlightSchedules.xlsx"


def schedule_instance(
    instance_dir: Path,
    out_root: Path = Path("outputs"),
    crew_xlsx: Optional[Path] = None,
    save_report: bool = True,
) -> Dict[str, Any]:
    """
    Schedule one instance directory and return KPIs + output paths.

    Reads scenario.json and crew.json (or `crew_xlsx` when given), builds
    the week's flights, allocates crew and writes:
      <out_root>/<instance_name>/schedule.json
      <out_root>/<instance_name>/FlightSchedules.xlsx
      <out_root>/<instance_name>/report/   (tables + plots, if save_report)

    Input errors raise before anything is written.
    """
    instance_dir = instance_dir.resolve()
    scenario = load_scenario(instance_dir / "scenario.json")
    if crew_xlsx is not None:
        crew: List[CrewMember] = load_crew_from_xlsx(crew_xlsx)
    else:
        crew = load_crew(instance_dir / "crew.json")

    validate_scenario(scenario)
    validate_crew(crew)

    schedule = generate_schedule(scenario_dates(scenario), normal_flights_by_date(scenario))
    allocate(schedule, crew)

    inst_name = instance_dir.name
    base_out = out_root / inst_name
    base_out.mkdir(parents=True, exist_ok=True)

    schedule_path = base_out / "schedule.json"
    schedule_path.write_text(json.dumps(schedule_to_json(schedule), indent=2), encoding="utf-8")
    xlsx_path = export_schedule_xlsx(schedule, base_out / SCHEDULE_XLSX)

    unfilled = unfilled_positions(schedule)
    assigned = sum(len(s.crew()) for s in schedule)
    unfilled_by_role: Counter = Counter()
    for _, role, n in unfilled:
        unfilled_by_role[role] += n

    result: Dict[str, Any] = {
        "instance_dir": str(instance_dir),
        "instance_name": inst_name,
        "n_dates": len(schedule.dates),
        "n_flights": len(schedule),
        "flights_by_type": dict(Counter(s.flight_type for s in schedule)),
        "n_assignments": assigned,
        "n_unfilled_seats": sum(n for _, _, n in unfilled),
        "unfilled_by_role": dict(unfilled_by_role),
        "schedule_json": str(schedule_path),
        "schedule_xlsx": str(xlsx_path),
    }

    if save_report:
        rep_dir = base_out / "report"
        frames = build_report_frames(schedule, crew)
        save_tables(frames, rep_dir)
        save_plots(frames, rep_dir)
        result["report_dir"] = str(rep_dir)

    return result
