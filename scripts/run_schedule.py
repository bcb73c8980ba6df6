from __future__ import annotations

import argparse
from pathlib import Path

from flight_scheduler.solver.schedule_instance import schedule_instance


DEFAULT_INSTANCE_DIR = Path("data/generated/week1")


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--instance-dir", type=Path, default=DEFAULT_INSTANCE_DIR)
    parser.add_argument("--out-dir", type=Path, default=Path("outputs"))
    parser.add_argument(
        "--crew-xlsx",
        type=Path,
        default=None,
        help="Read crew availability from a roster workbook instead of crew.json",
    )
    parser.add_argument("--no-report", action="store_true")
    args = parser.parse_args()

    res = schedule_instance(
        args.instance_dir,
        out_root=args.out_dir,
        crew_xlsx=args.crew_xlsx,
        save_report=not args.no_report,
    )

    print(f"Dates: {res['n_dates']}")
    print("Flights by type:", res["flights_by_type"])
    print(f"Assignments: {res['n_assignments']}")
    if res["n_unfilled_seats"]:
        print(f"Unfilled seats: {res['n_unfilled_seats']}", res["unfilled_by_role"])

    print(f"\nSaved: {res['schedule_json']}")
    print(f"Saved: {res['schedule_xlsx']}")
    if "report_dir" in res:
        print(f"Saved report: {res['report_dir']}")


if __name__ == "__main__":
    main()
