"""
Record types for the apartment, account and parking stores.

Each record knows how to write itself as one comma-separated line and how to
read itself back (``to_line`` / ``from_line``). Construction validates the
record, so a malformed line surfaces as ``ValueError`` and the managers can
skip it.
"""

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import ClassVar, Optional


# ------------------------- Field helpers ------------------------- #

def _parse_bool(text: str) -> bool:
    value = text.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"Expected 'true' or 'false', got {text!r}")


def _coerce_bool(value) -> bool:
    if isinstance(value, str):
        return _parse_bool(value)
    return bool(value)


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def check_single_field(value: str, label: str) -> str:
    """Reject text that would split or break a stored line."""
    if value and any(ch in value for ch in ",\r\n"):
        raise ValueError(f"{label} cannot contain commas or line breaks.")
    return value


def validate_reservation_date(date_str: str) -> str:
    """
    Accept a reservation date typed by the user:
    - Must match 'YYYY-MM-DD'
    - Must be a real calendar date
    Return the normalised 'YYYY-MM-DD' string.
    """
    date_str = (date_str or "").strip()
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", date_str):
        raise ValueError("Reservation Date must be in YYYY-MM-DD format.")

    year_str, month_str, day_str = date_str.split("-")
    try:
        candidate = date(int(year_str), int(month_str), int(day_str))
    except ValueError:
        raise ValueError("Invalid date for Reservation Date. Please use a real calendar date (YYYY-MM-DD).")

    return candidate.isoformat()


# ------------------------- Roles ------------------------- #

class Role(str, Enum):
    ADMIN = "admin"
    REGULAR = "regular"

    @classmethod
    def parse(cls, text) -> "Role":
        if isinstance(text, Role):
            return text
        value = str(text or "").strip().lower()
        for role in cls:
            if role.value == value:
                return role
        raise ValueError(f"Unknown role: {text!r}")

    def __str__(self) -> str:
        return self.value


# ------------------------- Apartment ------------------------- #

@dataclass
class Apartment:
    KEY_FIELD: ClassVar[str] = "number"
    FIELD_COUNT: ClassVar[int] = 5

    number: str
    tenant_name: str = ""
    rent: Decimal = Decimal("0")
    occupied: bool = False
    document_content: str = ""

    def __post_init__(self):
        self.number = (self.number or "").strip()
        if not self.number:
            raise ValueError("Apartment Number cannot be empty.")
        self.tenant_name = self.tenant_name or ""
        check_single_field(self.number, "Apartment Number")
        check_single_field(self.tenant_name, "Tenant Name")
        self.document_content = self.document_content or ""
        self.rent = self._validate_rent(self.rent)
        self.occupied = _coerce_bool(self.occupied)

    @staticmethod
    def _validate_rent(rent) -> Decimal:
        try:
            value = rent if isinstance(rent, Decimal) else Decimal(str(rent).strip())
        except InvalidOperation:
            raise ValueError("Invalid rent value.")
        if not value.is_finite():
            raise ValueError("Invalid rent value.")
        if value < 0:
            raise ValueError("Rent cannot be negative.")
        return value

    @property
    def key(self) -> str:
        return self.number

    def describe(self) -> str:
        status = "Occupied" if self.occupied else "Available"
        content_info = "Content: Yes" if self.document_content.strip() else "Content: No"
        return (f"Apt No: {self.number} | Tenant: {self.tenant_name} | "
                f"Rent: ${self.rent:.2f} | Status: {status} | {content_info}")

    def to_line(self) -> str:
        # Embedded newlines are stored as a literal backslash-n
        safe_content = self.document_content.replace("\n", "\\n").replace("\r", "")
        return ",".join([
            self.number,
            self.tenant_name,
            str(self.rent),
            _format_bool(self.occupied),
            safe_content,
        ])

    @classmethod
    def from_line(cls, line: str) -> "Apartment":
        # Only the first four commas separate fields; the document keeps the rest
        parts = line.split(",", cls.FIELD_COUNT - 1)
        if len(parts) != cls.FIELD_COUNT:
            raise ValueError(f"Expected {cls.FIELD_COUNT} fields, got {len(parts)}")
        return cls(
            number=parts[0],
            tenant_name=parts[1],
            rent=parts[2],
            occupied=_parse_bool(parts[3]),
            document_content=parts[4].replace("\\n", "\n"),
        )


# ------------------------- Tenant accounts ------------------------- #

@dataclass
class TenantAccount:
    KEY_FIELD: ClassVar[str] = "username"
    FIELD_COUNT: ClassVar[int] = 3

    username: str
    password: str = ""
    role: Role = Role.REGULAR

    def __post_init__(self):
        self.username = (self.username or "").strip()
        if not self.username:
            raise ValueError("Username cannot be empty.")
        check_single_field(self.username, "Username")
        self.password = self.password or ""
        check_single_field(self.password, "Password")
        self.role = Role.parse(self.role)

    @property
    def key(self) -> str:
        return self.username

    def to_line(self) -> str:
        return ",".join([self.username, self.password, self.role.value])

    @classmethod
    def from_line(cls, line: str) -> "TenantAccount":
        parts = line.split(",")
        if len(parts) != cls.FIELD_COUNT:
            raise ValueError(f"Expected {cls.FIELD_COUNT} fields, got {len(parts)}")
        return cls(username=parts[0], password=parts[1], role=Role.parse(parts[2]))


# ------------------------- Parking spots ------------------------- #

@dataclass
class ParkingSpot:
    """
    A parking spot and its reservation state.

    A spot is either free (no holder, no date) or reserved (both set);
    anything in between is rejected.
    """

    KEY_FIELD: ClassVar[str] = "spot_number"
    FIELD_COUNT: ClassVar[int] = 4

    spot_number: str
    reserved: bool = False
    reserved_by: Optional[str] = None
    reservation_date: Optional[str] = None

    def __post_init__(self):
        self.spot_number = (self.spot_number or "").strip()
        if not self.spot_number:
            raise ValueError("Spot Number cannot be empty.")
        check_single_field(self.spot_number, "Spot Number")
        self.reserved = _coerce_bool(self.reserved)
        # Blank text counts as absent
        self.reserved_by = (self.reserved_by or "").strip() or None
        self.reservation_date = (self.reservation_date or "").strip() or None
        check_single_field(self.reserved_by, "Reserved By")
        check_single_field(self.reservation_date, "Reservation Date")

        if self.reserved:
            if self.reserved_by is None:
                raise ValueError("Reserved By field cannot be empty if spot is reserved.")
            if self.reservation_date is None:
                raise ValueError("Reservation Date cannot be empty if spot is reserved.")
        elif self.reserved_by is not None or self.reservation_date is not None:
            raise ValueError("An unreserved spot cannot have a holder or a reservation date.")

    @property
    def key(self) -> str:
        return self.spot_number

    def to_line(self) -> str:
        return ",".join([
            self.spot_number,
            _format_bool(self.reserved),
            self.reserved_by or "",
            self.reservation_date or "",
        ])

    @classmethod
    def from_line(cls, line: str) -> "ParkingSpot":
        parts = line.split(",")
        if len(parts) != cls.FIELD_COUNT:
            raise ValueError(f"Expected {cls.FIELD_COUNT} fields, got {len(parts)}")
        return cls(
            spot_number=parts[0],
            reserved=_parse_bool(parts[1]),
            reserved_by=parts[2] or None,
            reservation_date=parts[3] or None,
        )
