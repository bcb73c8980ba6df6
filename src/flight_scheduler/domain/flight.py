from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from flight_scheduler.domain.crew import CrewMember


MAINTENANCE = "MAINTENANCE"
TRAINING = "TRAINING"
NORMAL = "NORMAL"

FLIGHT_TYPES = (MAINTENANCE, TRAINING, NORMAL)


@dataclass
class FlightSlot:
    """
    Represents one bookable flight that needs role-specific staffing.

    Slots are created empty by the slot generator and filled in place by
    the allocation engine.

    Attributes
    ----------
    index : int
        Zero-based position in the whole week's schedule.
        Training flights use its parity to pick their quota.
    position : int
        Zero-based position within the flight's day.
        Decides the flight type and scheduled time.
    flight_type : str
        MAINTENANCE, TRAINING or NORMAL.
    date : str
        Canonical date label, e.g. "Jan 02 06".
    time : str
        Scheduled time label, e.g. "0900".
    pc, fe : Optional[CrewMember]
        Single-valued role fields.
    pis, ces : List[CrewMember]
        Multi-valued role fields, in assignment order.
    """
    index: int
    position: int
    flight_type: str
    date: str
    time: str
    pc: Optional[CrewMember] = None
    pis: List[CrewMember] = field(default_factory=list)
    fe: Optional[CrewMember] = None
    ces: List[CrewMember] = field(default_factory=list)

    def occupants(self, role: str) -> int:
        if role == "PC":
            return 0 if self.pc is None else 1
        if role == "PI":
            return len(self.pis)
        if role == "FE":
            return 0 if self.fe is None else 1
        if role == "CE":
            return len(self.ces)
        raise ValueError(f"Unknown role: {role}")

    def assign(self, crew: CrewMember) -> None:
        if crew.role == "PC":
            self.pc = crew
        elif crew.role == "PI":
            self.pis.append(crew)
        elif crew.role == "FE":
            self.fe = crew
        elif crew.role == "CE":
            self.ces.append(crew)
        else:
            raise ValueError(f"Unknown role for crew {crew.name}: {crew.role}")

    def crew(self) -> List[CrewMember]:
        """All assigned crew, PC first, then PIs, FE and CEs."""
        out: List[CrewMember] = []
        if self.pc is not None:
            out.append(self.pc)
        out.extend(self.pis)
        if self.fe is not None:
            out.append(self.fe)
        out.extend(self.ces)
        return out


@dataclass
class Schedule:
    """Ordered flight slots for the whole date range. Order is significant."""
    slots: List[FlightSlot] = field(default_factory=list)

    def __iter__(self):
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def __getitem__(self, i: int) -> FlightSlot:
        return self.slots[i]

    @property
    def dates(self) -> List[str]:
        seen: List[str] = []
        for s in self.slots:
            if not seen or seen[-1] != s.date:
                seen.append(s.date)
        return seen

    def by_date(self) -> Dict[str, List[FlightSlot]]:
        out: Dict[str, List[FlightSlot]] = {}
        for s in self.slots:
            out.setdefault(s.date, []).append(s)
        return out
