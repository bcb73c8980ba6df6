from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from flight_scheduler.preprocessing.availability_xlsx import load_crew_from_xlsx
from flight_scheduler.preprocessing.loaders import (
    load_crew,
    load_scenario,
    normal_flights_by_date,
    scenario_dates,
)
from flight_scheduler.preprocessing.validate_crew import validate_crew, validate_scenario


DEFAULT_INSTANCE_DIR = Path("data/generated/week1")


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--instance-dir",
        type=Path,
        default=DEFAULT_INSTANCE_DIR,
        help="Path to instance folder (default: data/generated/week1)",
    )
    parser.add_argument("--crew-xlsx", type=Path, default=None)
    args = parser.parse_args()

    inst = args.instance_dir

    scenario = load_scenario(inst / "scenario.json")
    crew = load_crew_from_xlsx(args.crew_xlsx) if args.crew_xlsx else load_crew(inst / "crew.json")

    validate_scenario(scenario)
    validate_crew(crew)

    dates = scenario_dates(scenario)
    print(f"Dates: {dates[0]} .. {dates[-1]} ({len(dates)} days)")
    print(f"Crew count: {len(crew)}")
    print("Crew by role:", dict(Counter(c.role for c in crew)))
    print("Normal flights by date:", normal_flights_by_date(scenario))

    available = {d: Counter(c.role for c in crew if c.is_available(d)) for d in dates}
    print("\nAvailable crew by date:")
    for d in dates:
        print(f"  {d}: {dict(available[d])}")


if __name__ == "__main__":
    main()
