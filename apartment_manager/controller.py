"""
Policy layer between the windows and the record managers.

The GUI never talks to a manager directly. It calls a ``HubController``
method with the current ``Session`` and shows the returned ``Outcome``.
Input validation and role checks happen here, before any manager is touched.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, List, Optional

from .config import Settings
from .managers import AccountManager, ApartmentManager, ParkingManager
from .models import (Apartment, ParkingSpot, Role, TenantAccount,
                     check_single_field, validate_reservation_date)
from .session import Session

logger = logging.getLogger(__name__)

INVALID_LOGIN = "Invalid username or password."


@dataclass(frozen=True)
class Outcome:
    ok: bool
    message: str = ""
    value: Any = None

    @classmethod
    def success(cls, message: str = "", value: Any = None) -> "Outcome":
        return cls(True, message, value)

    @classmethod
    def failure(cls, message: str) -> "Outcome":
        return cls(False, message)


def _deny(message: str) -> Outcome:
    logger.info("Refused: %s", message)
    return Outcome.failure(message)


class HubController:
    def __init__(self, apartments: ApartmentManager, accounts: AccountManager, parking: ParkingManager):
        self.apartment_manager = apartments
        self.account_manager = accounts
        self.parking_manager = parking

    @classmethod
    def from_settings(cls, settings: Settings) -> "HubController":
        return cls(
            ApartmentManager(settings.apartments_path),
            AccountManager(settings.accounts_path),
            ParkingManager(settings.parking_path),
        )

    # ------------------------- Session ------------------------- #

    def login(self, username: str, password: str) -> Outcome:
        username = (username or "").strip()
        # Passwords are compared exactly, surrounding spaces included
        password = password or ""
        if not username or not password:
            return Outcome.failure("Username and password cannot be empty.")

        role = self.account_manager.authenticate(username, password)
        if role is None:
            logger.info("Failed login attempt for %r", username)
            return Outcome.failure(INVALID_LOGIN)

        # Keep the stored spelling of the username for the session
        account = self.account_manager.find_by_key(username)
        session = Session(username=account.username, role=role)
        logger.info("User %s logged in as %s", session.username, role.value)
        return Outcome.success(f"Welcome, {session.username}.", session)

    def logout(self, session: Session, save: Optional[bool]) -> Outcome:
        """
        End ``session``.

        ``save`` is the user's answer to "save before logging out?":
        True saves every store first, False discards, None cancels the logout.
        A failed save keeps the session open so the user can retry.
        """
        if save is None:
            return Outcome.failure("Logout cancelled.")

        if save:
            failed = [
                manager.label
                for manager in (self.apartment_manager, self.parking_manager, self.account_manager)
                if not manager.persist()
            ]
            if failed:
                return Outcome.failure(
                    f"Could not save {', '.join(failed)}. You are still logged in."
                )
            logger.info("User %s logged out, data saved", session.username)
            return Outcome.success("Data saved successfully. Logging out.")

        # Drop unsaved edits so the next session starts from what is on disk
        for manager in (self.apartment_manager, self.parking_manager, self.account_manager):
            manager.initialize()
        logger.info("User %s logged out without saving", session.username)
        return Outcome.success("Logged out without saving.")

    # ------------------------- Apartments ------------------------- #

    def apartments(self) -> List[Apartment]:
        return self.apartment_manager.list_all()

    def _build_apartment(self, number, tenant_name, rent, occupied, document_content) -> Apartment:
        return Apartment(
            number=(number or "").strip(),
            tenant_name=(tenant_name or "").strip(),
            rent=(rent or "").strip() if isinstance(rent, str) else rent,
            occupied=occupied,
            document_content=document_content or "",
        )

    def add_apartment(self, session: Session, number: str, tenant_name: str, rent,
                      occupied: bool, document_content: str = "") -> Outcome:
        if not session.is_admin:
            return _deny("Permission Denied: Only administrators can add apartments.")
        try:
            apartment = self._build_apartment(number, tenant_name, rent, occupied, document_content)
        except ValueError as e:
            return Outcome.failure(str(e))

        if not self.apartment_manager.add(apartment):
            return Outcome.failure(f"Apartment {apartment.number} already exists.")
        return Outcome.success(f"Apartment {apartment.number} added successfully.")

    def update_apartment(self, session: Session, number: str, tenant_name: str, rent,
                         occupied: bool, document_content: str = "") -> Outcome:
        if not session.is_admin:
            return _deny("Permission Denied: Only administrators can update apartments.")
        if not (number or "").strip():
            return Outcome.failure("Please select an apartment to update.")
        try:
            apartment = self._build_apartment(number, tenant_name, rent, occupied, document_content)
        except ValueError as e:
            return Outcome.failure(str(e))

        if not self.apartment_manager.update(apartment):
            return Outcome.failure(f"Apartment {apartment.number} not found for update.")
        return Outcome.success(f"Apartment {apartment.number} updated successfully.")

    def delete_apartment(self, session: Session, number: str) -> Outcome:
        if not session.is_admin:
            return _deny("Permission Denied: Only administrators can delete apartments.")
        if not self.apartment_manager.delete(number):
            return Outcome.failure(f"Apartment {number} not found.")
        return Outcome.success(f"Apartment {number} deleted.")

    def book_apartment(self, session: Session, number: str) -> Outcome:
        """Let a regular tenant take an available unit under their own name."""
        if session.is_admin:
            return _deny("Permission Denied: Only regular users can book apartments.")
        apartment = self.apartment_manager.find_by_key(number)
        if apartment is None:
            return Outcome.failure(f"Apartment {number} not found.")
        if apartment.occupied:
            return Outcome.failure("This apartment is already occupied.")

        booked = replace(apartment, tenant_name=session.username, occupied=True)
        self.apartment_manager.update(booked)
        return Outcome.success(f"Apartment {apartment.number} booked successfully by {session.username}")

    # ------------------------- Accounts ------------------------- #

    def accounts(self, session: Session) -> List[TenantAccount]:
        if not session.is_admin:
            return []
        return self.account_manager.list_all()

    def add_account(self, session: Session, username: str, password: str, role) -> Outcome:
        if not session.is_admin:
            return _deny("Permission Denied: Only administrators can manage users.")
        username = (username or "").strip()
        password = (password or "").strip()
        if not username or not password:
            return Outcome.failure("Username and Password cannot be empty.")
        try:
            account = TenantAccount(username, password, Role.parse(role))
        except ValueError as e:
            return Outcome.failure(str(e))

        if not self.account_manager.add(account):
            return Outcome.failure(f"User {username} already exists.")
        return Outcome.success(f"User {username} added successfully.")

    def update_account(self, session: Session, username: str, password: str, role) -> Outcome:
        """Change an account's role, and its password when a new one is given."""
        if not session.is_admin:
            return _deny("Permission Denied: Only administrators can manage users.")
        username = (username or "").strip()
        if not username:
            return Outcome.failure("Please select a user to update.")
        existing = self.account_manager.find_by_key(username)
        if existing is None:
            return Outcome.failure(f"User {username} not found for update.")
        try:
            new_role = Role.parse(role)
        except ValueError as e:
            return Outcome.failure(str(e))

        password = (password or "").strip()
        try:
            updated = replace(existing, password=password or existing.password, role=new_role)
        except ValueError as e:
            return Outcome.failure(str(e))
        self.account_manager.update(updated)
        return Outcome.success(f"User {existing.username} updated successfully.")

    def delete_account(self, session: Session, username: str) -> Outcome:
        if not session.is_admin:
            return _deny("Permission Denied: Only administrators can manage users.")
        if session.owns(username):
            return Outcome.failure("You cannot delete your own account.")
        if not self.account_manager.delete(username):
            return Outcome.failure(f"Failed to delete user {username}.")
        return Outcome.success(f"User {username} deleted.")

    # ------------------------- Parking ------------------------- #

    def spots(self) -> List[ParkingSpot]:
        return self.parking_manager.list_all()

    def add_spot(self, session: Session, spot_number: str, reserved: bool = False,
                 reserved_by: Optional[str] = None, reservation_date: Optional[str] = None) -> Outcome:
        if not session.is_admin:
            return _deny("Permission Denied: Only administrators can add parking spots.")
        spot_number = (spot_number or "").strip()
        if not spot_number:
            return Outcome.failure("Spot Number cannot be empty.")

        if reserved:
            reserved_by = (reserved_by or "").strip()
            if not reserved_by:
                return Outcome.failure("Reserved By field cannot be empty if spot is reserved.")
            if not (reservation_date or "").strip():
                return Outcome.failure("Reservation Date cannot be empty if spot is reserved.")
            try:
                reservation_date = validate_reservation_date(reservation_date)
            except ValueError as e:
                return Outcome.failure(str(e))
        else:
            reserved_by = None
            reservation_date = None

        try:
            spot = ParkingSpot(spot_number, reserved, reserved_by, reservation_date)
        except ValueError as e:
            return Outcome.failure(str(e))
        if not self.parking_manager.add(spot):
            return Outcome.failure(f"Parking spot {spot_number} already exists.")
        return Outcome.success(f"Parking spot {spot_number} added successfully.")

    def reserve_spot(self, session: Session, spot_number: str, reservation_date: str,
                     tenant_name: Optional[str] = None) -> Outcome:
        spot = self.parking_manager.find_by_key(spot_number)
        if spot is None:
            return Outcome.failure(f"Parking spot {spot_number} not found.")
        if spot.reserved:
            return Outcome.failure(f"Spot {spot.spot_number} is already reserved by {spot.reserved_by}.")

        tenant = (tenant_name or "").strip() or session.username
        if not session.is_admin and not session.owns(tenant):
            return _deny("Permission Denied: You can only reserve parking spots for yourself.")
        try:
            check_single_field(tenant, "Reserved By")
            reservation_date = validate_reservation_date(reservation_date)
        except ValueError as e:
            return Outcome.failure(str(e))

        if not self.parking_manager.reserve(spot.spot_number, tenant, reservation_date):
            return Outcome.failure(f"Failed to reserve spot {spot.spot_number}.")
        return Outcome.success(f"Spot {spot.spot_number} reserved by {tenant} for {reservation_date}.")

    def cancel_spot(self, session: Session, spot_number: str) -> Outcome:
        spot = self.parking_manager.find_by_key(spot_number)
        if spot is None:
            return Outcome.failure(f"Parking spot {spot_number} not found.")
        if not spot.reserved:
            return Outcome.failure(f"Spot {spot.spot_number} is not currently reserved.")
        if not session.is_admin and not session.owns(spot.reserved_by):
            return _deny("Permission Denied: You can only cancel your own parking reservations.")

        if not self.parking_manager.cancel(spot.spot_number):
            return Outcome.failure(f"Failed to cancel reservation for spot {spot.spot_number}.")
        return Outcome.success(f"Reservation for spot {spot.spot_number} cancelled.")

    def delete_spot(self, session: Session, spot_number: str) -> Outcome:
        if not session.is_admin:
            return _deny("Permission Denied: Only administrators can delete parking spots.")
        if not self.parking_manager.delete(spot_number):
            return Outcome.failure(f"Parking spot {spot_number} not found.")
        return Outcome.success(f"Parking spot {spot_number} deleted.")
