from datetime import date, timedelta

import pytest

from apartment_manager.managers import ParkingManager
from apartment_manager.models import ParkingSpot


def assert_consistent(spots):
    for spot in spots:
        if spot.reserved:
            assert spot.reserved_by is not None and spot.reservation_date is not None
        else:
            assert spot.reserved_by is None and spot.reservation_date is None


class TestParkingManager:
    def test_seeded_spots(self, parking):
        spots = parking.list_all()

        assert [s.spot_number for s in spots] == ["P01", "P02", "P03", "P04", "P05"]
        assert [s.reserved for s in spots] == [False, True, False, True, False]
        assert spots[1].reserved_by == "Alice Smith"
        assert spots[1].reservation_date == date.today().isoformat()
        assert spots[3].reserved_by == "Bob Johnson"
        assert spots[3].reservation_date == (date.today() + timedelta(days=2)).isoformat()

    def test_reserve_and_cancel_scenario(self, parking):
        assert parking.reserve("P01", "Alice", "2025-03-01") is True
        assert parking.reserve("P01", "Bob", "2025-04-01") is False

        spot = parking.find_by_key("p01")
        assert spot.reserved_by == "Alice"
        assert spot.reservation_date == "2025-03-01"

        assert parking.cancel("P01") is True
        spot = parking.find_by_key("P01")
        assert spot.reserved is False
        assert spot.reserved_by is None
        assert spot.reservation_date is None

        assert parking.cancel("P01") is False

    def test_reserve_or_cancel_unknown_spot(self, parking):
        assert parking.reserve("Z99", "Alice", "2025-03-01") is False
        assert parking.cancel("Z99") is False

    def test_reserve_without_holder_is_refused(self, parking):
        assert parking.reserve("P03", "", "2025-03-01") is False
        assert parking.reserve("P03", "   ", "2025-03-01") is False
        assert parking.reserve("P03", "Alice", None) is False
        assert parking.find_by_key("P03").reserved is False

    def test_invariant_holds_after_any_sequence(self, parking):
        operations = [
            ("reserve", "P01", "Ann", "2025-01-01"),
            ("cancel", "P02"),
            ("reserve", "P02", "Ben", "2025-02-02"),
            ("cancel", "P03"),
            ("reserve", "P04", "Cy", "2025-03-03"),
            ("cancel", "P01"),
            ("reserve", "P05", "", "2025-05-05"),
            ("cancel", "P04"),
        ]
        for op, *args in operations:
            getattr(parking, op)(*args)
            assert_consistent(parking.list_all())

    def test_add_and_delete_spot(self, parking):
        assert parking.add(ParkingSpot("P06")) is True
        assert parking.add(ParkingSpot("p06")) is False
        assert len(parking) == 6

        assert parking.delete("P06") is True
        assert parking.find_by_key("P06") is None
        assert len(parking) == 5

    def test_update_replaces_reservation_state(self, parking):
        assert parking.update(ParkingSpot("p02")) is True

        spot = parking.find_by_key("P02")
        assert spot.spot_number == "P02"
        assert spot.reserved is False
        assert spot.reserved_by is None

    def test_round_trip(self, parking):
        parking.reserve("P01", "Alice", "2025-03-01")
        parking.persist()

        reloaded = ParkingManager(parking.path)

        assert reloaded.list_all() == parking.list_all()
        assert "P01,true,Alice,2025-03-01" in parking.path.read_text(encoding="utf-8").splitlines()
        assert "P03,false,," in parking.path.read_text(encoding="utf-8").splitlines()

    def test_half_reserved_lines_are_skipped(self, tmp_path):
        path = tmp_path / "parking_lots.dat"
        path.write_text("P10,false,,\nP11,true,,2025-01-01\nP12,true,Dana,2025-01-02\n", encoding="utf-8")

        manager = ParkingManager(path)

        assert [s.spot_number for s in manager.list_all()] == ["P10", "P12"]

    def test_spot_constructor_enforces_invariant(self):
        with pytest.raises(ValueError):
            ParkingSpot("P01", reserved=True)
