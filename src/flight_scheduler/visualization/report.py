from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from matplotlib.colors import ListedColormap
import pandas as pd

from flight_scheduler.domain.crew import ROLES, CrewMember
from flight_scheduler.domain.flight import Schedule
from flight_scheduler.model.occupancy import quota


# calendar code -> (colour, legend label)
CALENDAR_CODES = [
    ("#f2f2f2", "Available"),    # 0 = not scheduled, available (light grey)
    ("#2ca02c", "Flying"),       # 1 = flying (green)
    ("#d62728", "Unavailable"),  # 2 = unavailable (red)
]
cmap = ListedColormap([color for color, _ in CALENDAR_CODES])


@dataclass(frozen=True)
class ReportFrames:
    assignments: pd.DataFrame
    work_matrix: pd.DataFrame
    calendar_matrix: pd.DataFrame
    workloads: pd.DataFrame
    coverage: pd.DataFrame


def build_report_frames(schedule: Schedule, crew: List[CrewMember]) -> ReportFrames:
    names = [c.name for c in crew]
    dates = schedule.dates

    # --- Assignments (one row per slot/role/crew) ---
    rows = []
    for slot in schedule:
        for c in slot.crew():
            rows.append(
                {
                    "index": slot.index,
                    "date": slot.date,
                    "flight_type": slot.flight_type,
                    "time": slot.time,
                    "role": c.role,
                    "crew": c.name,
                    "rank": c.rank,
                }
            )
    assignments = pd.DataFrame(
        rows, columns=["index", "date", "flight_type", "time", "role", "crew", "rank"]
    )

    # --- Work matrix (crew x date) ---
    work_matrix = pd.DataFrame(0, index=names, columns=dates, dtype=int)
    for _, r in assignments.iterrows():
        work_matrix.loc[r["crew"], r["date"]] = 1
    work_matrix.index.name = "crew"

    # 2 marks days the crew member could not fly at all
    unavailable = np.array(
        [[0 if c.is_available(d) else 1 for d in dates] for c in crew], dtype=int
    ).reshape(len(crew), len(dates))
    calendar_matrix = pd.DataFrame(
        np.where(unavailable == 1, 2, work_matrix.values),
        index=work_matrix.index,
        columns=dates,
    )

    # --- Workloads ---
    flights = assignments.groupby("crew").size() if not assignments.empty else pd.Series(dtype=int)
    workloads = pd.DataFrame(
        {
            "crew": names,
            "role": [c.role for c in crew],
            "flights": [int(flights.get(n, 0)) for n in names],
            "days_available": [sum(c.is_available(d) for d in dates) for c in crew],
        }
    )

    # --- Coverage (slot x role) ---
    cov_rows = []
    for slot in schedule:
        for role in ROLES:
            q = quota(role, slot)
            n = slot.occupants(role)
            cov_rows.append(
                {
                    "index": slot.index,
                    "date": slot.date,
                    "flight_type": slot.flight_type,
                    "role": role,
                    "quota": q,
                    "assigned": n,
                    "missing": max(0, q - n),
                }
            )
    coverage = pd.DataFrame(
        cov_rows,
        columns=["index", "date", "flight_type", "role", "quota", "assigned", "missing"],
    )

    return ReportFrames(
        assignments=assignments,
        work_matrix=work_matrix,
        calendar_matrix=calendar_matrix,
        workloads=workloads,
        coverage=coverage,
    )


def plot_work_calendar(frames: ReportFrames, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    cm = frames.calendar_matrix

    fig, ax = plt.subplots(figsize=(12, max(3, 0.35 * len(cm.index) + 1)))
    ax.imshow(cm.values, aspect="auto", cmap=cmap, vmin=0, vmax=2)

    ax.set_yticks(range(len(cm.index)))
    ax.set_yticklabels(cm.index, fontsize=9)
    ax.set_xticks(range(len(cm.columns)))
    ax.set_xticklabels(cm.columns, fontsize=10)

    ax.set_xlabel("Date", fontsize=12)
    ax.set_ylabel("Crew", fontsize=12)
    ax.set_title("Flight Calendar", fontsize=16, fontweight="bold")

    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)

    legend_patches = [mpatches.Patch(color=color, label=label) for color, label in CALENDAR_CODES]
    ax.legend(
        handles=legend_patches,
        fontsize=10,
        loc="upper left",
        bbox_to_anchor=(1.02, 1),
        borderaxespad=0,
    )

    plt.tight_layout()
    plt.savefig(out_dir / "flight_calendar.png", dpi=200, bbox_inches="tight")
    plt.close(fig)


def plot_flights_per_crew(frames: ReportFrames, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    wl = frames.workloads.sort_values(["role", "crew"])

    plt.figure(figsize=(12, 6))
    plt.bar(wl["crew"], wl["flights"])
    plt.xticks(rotation=60, ha="right")
    plt.xlabel("Crew")
    plt.ylabel("Flights")
    plt.title("Flights per crew")
    plt.tight_layout()
    plt.savefig(out_dir / "flights_per_crew.png", dpi=160)
    plt.close()


def plot_coverage_by_role(frames: ReportFrames, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    by_role = frames.coverage.groupby("role")[["quota", "assigned"]].sum().reindex(list(ROLES))

    x = np.arange(len(by_role.index))
    width = 0.4

    fig, ax = plt.subplots()
    ax.bar(x - width / 2, by_role["quota"], width, label="Seats")
    ax.bar(x + width / 2, by_role["assigned"], width, label="Assigned")
    ax.set_xticks(x)
    ax.set_xticklabels(by_role.index)
    ax.set_ylabel("Seats over the week")
    ax.set_title("Coverage by Role")
    ax.legend()

    plt.tight_layout()
    plt.savefig(out_dir / "coverage_by_role.png", dpi=200)
    plt.close(fig)


def save_plots(frames: ReportFrames, out_dir: Path) -> None:
    plot_work_calendar(frames, out_dir)
    plot_flights_per_crew(frames, out_dir)
    plot_coverage_by_role(frames, out_dir)


def save_tables(frames: ReportFrames, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    frames.assignments.to_csv(out_dir / "assignments.csv", index=False)
    frames.work_matrix.to_csv(out_dir / "work_matrix.csv")
    frames.calendar_matrix.to_csv(out_dir / "calendar_matrix.csv")
    frames.workloads.to_csv(out_dir / "workloads.csv", index=False)
    frames.coverage.to_csv(out_dir / "coverage.csv", index=False)
