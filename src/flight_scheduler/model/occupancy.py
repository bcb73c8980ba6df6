from __future__ import annotations

from typing import Dict

from flight_scheduler.domain.flight import MAINTENANCE, NORMAL, TRAINING, FlightSlot


# role -> flight type -> seats; training flights are split by the parity of
# the slot's index in the whole schedule (not its position in the day).
QUOTAS: Dict[str, Dict[str, int]] = {
    "PC": {MAINTENANCE: 1, "TRAINING_EVEN": 1, "TRAINING_ODD": 1, NORMAL: 1},
    "PI": {MAINTENANCE: 1, "TRAINING_EVEN": 2, "TRAINING_ODD": 1, NORMAL: 1},
    "FE": {MAINTENANCE: 1, "TRAINING_EVEN": 1, "TRAINING_ODD": 1, NORMAL: 1},
    "CE": {MAINTENANCE: 0, "TRAINING_EVEN": 1, "TRAINING_ODD": 3, NORMAL: 1},
}


def _quota_key(slot: FlightSlot) -> str:
    if slot.flight_type == TRAINING:
        return "TRAINING_EVEN" if slot.index % 2 == 0 else "TRAINING_ODD"
    return slot.flight_type


def quota(role: str, slot: FlightSlot) -> int:
    if role not in QUOTAS:
        raise ValueError(f"Unknown role: {role}")
    key = _quota_key(slot)
    if key not in QUOTAS[role]:
        raise ValueError(f"Unknown flight type for slot {slot.index}: {slot.flight_type}")
    return QUOTAS[role][key]


def is_full(role: str, slot: FlightSlot) -> bool:
    """True once `role` has as many occupants on `slot` as its quota allows."""
    return slot.occupants(role) >= quota(role, slot)


def missing(role: str, slot: FlightSlot) -> int:
    return max(0, quota(role, slot) - slot.occupants(role))
