from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from flight_scheduler.domain.flight import MAINTENANCE, NORMAL, TRAINING, FlightSlot, Schedule
from flight_scheduler.preprocessing.dates import DateLike, date_label


NUMBER_OF_MAINTENANCE_FLIGHTS = 1
NUMBER_OF_TRAINING_FLIGHTS = 3

# position within the day -> (flight type, scheduled time)
# Position 4 is TRAINING even though 1..3 already cover the training flights.
SLOT_POLICY: Dict[int, Tuple[str, str]] = {
    0: (MAINTENANCE, "0900"),
    1: (TRAINING, "0800"),
    2: (TRAINING, "1000"),
    3: (TRAINING, "1100"),
    4: (TRAINING, "1200"),
    5: (NORMAL, "1200"),
    6: (NORMAL, "1700"),
}

MAX_NORMAL_FLIGHTS = len(SLOT_POLICY) - NUMBER_OF_MAINTENANCE_FLIGHTS - NUMBER_OF_TRAINING_FLIGHTS


class SlotPolicyError(ValueError):
    """Raised for a within-day position that has no type/time policy."""


def slot_policy(position: int) -> Tuple[str, str]:
    try:
        return SLOT_POLICY[position]
    except KeyError:
        raise SlotPolicyError(
            f"No flight type/time defined for position {position} in a day "
            f"(at most {MAX_NORMAL_FLIGHTS} normal flights per day are supported)"
        ) from None


def flights_per_day(normal_flights: int) -> int:
    if normal_flights < 0:
        raise ValueError(f"Normal flight count must be >= 0, got {normal_flights}")
    return NUMBER_OF_MAINTENANCE_FLIGHTS + NUMBER_OF_TRAINING_FLIGHTS + normal_flights


def generate_schedule(
    dates: Sequence[DateLike],
    normal_flights_by_date: Dict[str, int],
    default_normal_flights: int = 0,
) -> Schedule:
    """
    Build the empty flight slots for every date, in date order.

    Each day gets 1 maintenance flight, 3 training flights and then the
    configured number of normal flights. Dates are normalised to the
    canonical label before being attached to slots, and so are the keys of
    `normal_flights_by_date`.

    The whole day configuration is checked before any slot is built, so a
    bad count or date never yields a partial schedule.
    """
    counts = {date_label(d): int(n) for d, n in normal_flights_by_date.items()}
    labels = [date_label(d) for d in dates]

    plan: List[Tuple[str, int]] = []
    for label in labels:
        n = flights_per_day(counts.get(label, default_normal_flights))
        slot_policy(n - 1)
        plan.append((label, n))

    slots: List[FlightSlot] = []
    for label, n in plan:
        for position in range(n):
            flight_type, time = slot_policy(position)
            slots.append(
                FlightSlot(
                    index=len(slots),
                    position=position,
                    flight_type=flight_type,
                    date=label,
                    time=time,
                )
            )

    return Schedule(slots=slots)
