import pytest

from apartment_manager.config import Settings
from apartment_manager.controller import HubController
from apartment_manager.managers import AccountManager, ApartmentManager, ParkingManager
from apartment_manager.models import Role
from apartment_manager.session import Session


@pytest.fixture
def settings(tmp_path):
    """Settings pointing every store at a fresh temporary directory"""
    return Settings(data_dir=tmp_path)


@pytest.fixture
def apartments(settings):
    return ApartmentManager(settings.apartments_path)


@pytest.fixture
def accounts(settings):
    return AccountManager(settings.accounts_path)


@pytest.fixture
def parking(settings):
    return ParkingManager(settings.parking_path)


@pytest.fixture
def controller(settings):
    return HubController.from_settings(settings)


@pytest.fixture
def admin_session():
    return Session(username="admin", role=Role.ADMIN)


@pytest.fixture
def tenant_session():
    return Session(username="user", role=Role.REGULAR)
