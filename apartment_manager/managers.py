"""
In-memory record managers backed by flat files.

Every manager keeps its records in an insertion-ordered dict keyed by the
lower-cased identifier, loads them once when constructed and writes them back
only when ``persist`` is called. Callers always get copies; the stored records
are never handed out.
"""

import logging
import os
from dataclasses import replace
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, List, Optional

from .models import Apartment, ParkingSpot, Role, TenantAccount

logger = logging.getLogger(__name__)


def _normalize(key) -> str:
    return str(key or "").strip().lower()


class RecordManager:
    """Shared load / lookup / save behaviour for one record type."""

    record_type = None
    label = "records"

    def __init__(self, path):
        self.path = Path(path)
        self._records: Dict[str, object] = {}
        self.initialize()

    # ------------- Loading ------------- #

    def initialize(self) -> None:
        """Load the backing file; fall back to seed data when nothing usable is there."""
        self._records.clear()
        self._load()
        if not self._records:
            seed = self.seed_records()
            for record in seed:
                self._records[_normalize(record.key)] = record
            logger.info("Seeded %d default %s", len(seed), self.label)

    def _load(self) -> None:
        if not os.path.exists(self.path):
            logger.info("No %s store at %s, starting empty", self.label, self.path)
            return

        skipped = 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.rstrip("\r\n")
                    if not line:
                        continue
                    try:
                        record = self.record_type.from_line(line)
                    except ValueError as e:
                        skipped += 1
                        logger.debug("Skipping malformed %s line %r: %s", self.label, line, e)
                        continue
                    key = _normalize(record.key)
                    if key in self._records:
                        skipped += 1
                        logger.debug("Skipping duplicate %s key %r", self.label, record.key)
                        continue
                    self._records[key] = record
        except (OSError, UnicodeDecodeError) as e:
            # An unreadable store is treated as empty
            logger.warning("Error loading %s from %s: %s", self.label, self.path, e)
            self._records.clear()
            return

        logger.info("Loaded %d %s from %s (%d skipped)", len(self._records), self.label, self.path, skipped)

    def seed_records(self) -> list:
        return []

    # ------------- CRUD ------------- #

    def add(self, record) -> bool:
        key = _normalize(record.key)
        if key in self._records:
            return False
        self._records[key] = replace(record)
        return True

    def find_by_key(self, key):
        record = self._records.get(_normalize(key))
        return replace(record) if record is not None else None

    def update(self, record) -> bool:
        """Overwrite the mutable fields of an existing record; never inserts."""
        key = _normalize(record.key)
        existing = self._records.get(key)
        if existing is None:
            return False
        # The stored identifier (including its original case) is kept
        self._records[key] = replace(record, **{self.record_type.KEY_FIELD: existing.key})
        return True

    def delete(self, key) -> bool:
        return self._records.pop(_normalize(key), None) is not None

    def list_all(self) -> list:
        return [replace(r) for r in self._records.values()]

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key) -> bool:
        return _normalize(key) in self._records

    # ------------- Saving ------------- #

    def persist(self) -> bool:
        """Rewrite the whole store. Returns False (and logs) if the write fails."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8", newline="\n") as f:
                for record in self._records.values():
                    f.write(record.to_line() + "\n")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Error saving %s to %s: %s", self.label, self.path, e)
            try:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
            except OSError:
                logger.debug("Could not remove temporary file %s", tmp_path)
            return False

        logger.info("Saved %d %s to %s", len(self._records), self.label, self.path)
        return True


class ApartmentManager(RecordManager):
    record_type = Apartment
    label = "apartments"

    def seed_records(self) -> List[Apartment]:
        return [Apartment("101", "Steph Curry", "20000.00", True, "Arriving soon.")]


class AccountManager(RecordManager):
    record_type = TenantAccount
    label = "accounts"

    def seed_records(self) -> List[TenantAccount]:
        return [
            TenantAccount("admin", "adminpass", Role.ADMIN),
            TenantAccount("user", "password", Role.REGULAR),
            TenantAccount("manager", "manage123", Role.REGULAR),
        ]

    def authenticate(self, username: str, password: str) -> Optional[Role]:
        """
        Return the account's role if the password matches exactly.

        Unknown users and wrong passwords both give None so callers cannot
        tell them apart.
        """
        account = self._records.get(_normalize(username))
        if account is not None and account.password == password:
            return account.role
        return None


class ParkingManager(RecordManager):
    record_type = ParkingSpot
    label = "parking spots"

    def seed_records(self) -> List[ParkingSpot]:
        today = date.today()
        return [
            ParkingSpot("P01"),
            ParkingSpot("P02", True, "Alice Smith", today.isoformat()),
            ParkingSpot("P03"),
            ParkingSpot("P04", True, "Bob Johnson", (today + timedelta(days=2)).isoformat()),
            ParkingSpot("P05"),
        ]

    def reserve(self, spot_number: str, tenant_name: str, reservation_date: str) -> bool:
        key = _normalize(spot_number)
        spot = self._records.get(key)
        if spot is None or spot.reserved:
            return False
        try:
            self._records[key] = replace(spot, reserved=True, reserved_by=tenant_name,
                                         reservation_date=reservation_date)
        except ValueError as e:
            # Blank holder or date would leave the spot half-reserved
            logger.info("Refusing reservation of %s: %s", spot.spot_number, e)
            return False
        return True

    def cancel(self, spot_number: str) -> bool:
        key = _normalize(spot_number)
        spot = self._records.get(key)
        if spot is None or not spot.reserved:
            return False
        self._records[key] = replace(spot, reserved=False, reserved_by=None, reservation_date=None)
        return True
