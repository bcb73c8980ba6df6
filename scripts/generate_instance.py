from __future__ import annotations

import argparse
import json
import random
from pathlib import Path
from typing import Any, Dict, List

from flight_scheduler.preprocessing.dates import week_dates
from flight_scheduler.preprocessing.loaders import DEFAULT_NORMAL_FLIGHTS

"""
Default run:
    python scripts/generate_instance.py

Override example:
    python scripts/generate_instance.py --start-date 3/4/2024 --seed 7 --out-dir data/generated/week2
"""

FIRST_NAMES = ["Alex", "Blake", "Casey", "Drew", "Emery", "Finley", "Gray", "Harper",
               "Indy", "Jordan", "Kai", "Logan", "Morgan", "Noel", "Parker", "Quinn",
               "Reese", "Sage", "Taylor", "Val"]
LAST_NAMES = ["Adams", "Brooks", "Cole", "Diaz", "Ellis", "Frost", "Grant", "Hayes",
              "Irwin", "James", "Knox", "Lane", "Moss", "Nash", "Owens", "Price"]
RANKS = {"PC": "CPT", "PI": "1LT", "FE": "SSG", "CE": "SGT"}
BUSY_CODES = ["L", "TDY", "SCH", "DNIF"]


def write_json(path: Path, obj: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def make_crew(
    rng: random.Random,
    dates: List[str],
    counts: Dict[str, int],
    busy_rate: float,
) -> List[Dict[str, Any]]:
    crew = []
    used = set()
    for role, n in counts.items():
        for _ in range(n):
            while True:
                first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
                if (first, last) not in used:
                    used.add((first, last))
                    break
            crew.append(
                {
                    "first_name": first,
                    "last_name": last,
                    "role": role,
                    "rank": RANKS[role],
                    "availability": {
                        d: (rng.choice(BUSY_CODES) if rng.random() < busy_rate else "")
                        for d in dates
                    },
                }
            )
    return crew


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--start-date", type=str, default="1/2/2006")
    parser.add_argument("--out-dir", type=Path, default=Path("data/generated/week1"))
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--pcs", type=int, default=6)
    parser.add_argument("--pis", type=int, default=8)
    parser.add_argument("--fes", type=int, default=6)
    parser.add_argument("--ces", type=int, default=10)
    parser.add_argument("--busy-rate", type=float, default=0.2)
    parser.add_argument("--normal-flights", type=int, default=DEFAULT_NORMAL_FLIGHTS)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    dates = week_dates(args.start_date)

    crew = make_crew(
        rng,
        dates,
        {"PC": args.pcs, "PI": args.pis, "FE": args.fes, "CE": args.ces},
        args.busy_rate,
    )
    scenario = {
        "start_date": args.start_date,
        "days": len(dates),
        "default_normal_flights": args.normal_flights,
        "normal_flights": {},
    }

    write_json(args.out_dir / "crew.json", {"crew": crew})
    write_json(args.out_dir / "scenario.json", scenario)

    print(f"Generated {len(crew)} crew over {dates[0]} .. {dates[-1]} into: {args.out_dir}")


if __name__ == "__main__":
    main()
