# Standard library imports
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple


class Role(str, Enum):
    """Directory partition an identity is enrolled under"""
    STUDENT = "student"
    STAFF = "staff"


class Mode(str, Enum):
    """Residence mode; decides the direction policy at the gate"""
    HOSTELLER = "Hosteller"
    DAY_SCHOLAR = "DayScholar"
    STAFF = "Staff"

    @classmethod
    def parse(cls, value: Optional[str], role: Role) -> "Mode":
        """
        Parse a stored mode string leniently.

        Staff are always Staff. Students with a missing mode default to
        Hosteller, which is what the enrollment form pre-selects.

        Raises:
            ValueError: If the value is not a recognised mode
        """
        if role == Role.STAFF:
            return cls.STAFF
        if not value or not str(value).strip():
            return cls.HOSTELLER
        normalized = "".join(str(value).split()).lower()
        for mode in cls:
            if mode.value.lower() == normalized:
                return mode
        raise ValueError(f"Unknown mode: {value}")


@dataclass(frozen=True)
class Identity:
    """
    Pure domain model for an enrolled person (staff member or student).

    Read-only to the gate pipeline; enrollment happens elsewhere.
    """
    id: str
    name: str
    department: str
    role: Role
    mode: Mode
    descriptor: Optional[Tuple[float, ...]] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.id or not str(self.id).strip():
            raise ValueError("Identity ID is required")
        if not self.name or not self.name.strip():
            raise ValueError("Identity name is required")
        if self.role == Role.STAFF and self.mode != Mode.STAFF:
            raise ValueError("Staff identities must use Staff mode")
        if self.role == Role.STUDENT and self.mode == Mode.STAFF:
            raise ValueError("Students cannot use Staff mode")

    @property
    def key(self) -> str:
        """Process-wide unique key; ids are only unique within a role."""
        return f"{self.role.value}:{self.id}"

    @property
    def requires_exit_approval(self) -> bool:
        return self.mode == Mode.HOSTELLER

    def is_matchable(self, dimension: int) -> bool:
        """True when the identity has a descriptor of the expected length."""
        return self.descriptor is not None and len(self.descriptor) == dimension


def to_descriptor(values: Optional[Sequence[Any]]) -> Optional[Tuple[float, ...]]:
    """
    Convert a stored descriptor (list of numbers) into an immutable tuple.

    Returns None for missing, empty or non-numeric input.
    """
    if not values:
        return None
    try:
        return tuple(float(v) for v in values)
    except (TypeError, ValueError):
        return None
