"""Tests for address allocation."""

import itertools
import logging

import pytest

from store_netconfig.allocator import AddressAllocator
from store_netconfig.errors import NoAvailableAddressError, UnsupportedPlatformError
from store_netconfig.models import AddressRange
from tests.conftest import FakeProbe

PREFIX = "10.20.30."


def make_range(start: int, end: int) -> AddressRange:
    return AddressRange.model_validate({"from": start, "to": end})


class TestCandidates:
    """Tests for candidate address generation."""

    def test_ascending_order(self) -> None:
        """Test that candidates cover the range in ascending order."""
        candidates = list(AddressAllocator.candidates(make_range(8, 11), PREFIX))
        assert candidates == ["10.20.30.8", "10.20.30.9", "10.20.30.10", "10.20.30.11"]

    def test_no_probing(self) -> None:
        """Test that generating candidates issues no probes."""
        probe = FakeProbe()
        allocator = AddressAllocator(probe)
        list(allocator.candidates(make_range(1, 3), PREFIX))
        assert probe.probed == []


class TestAllocate:
    """Tests for AddressAllocator.allocate."""

    def test_first_free_after_occupied(self) -> None:
        """Test range 10-12 with .10 and .11 occupied returns .12."""
        probe = FakeProbe(occupied={"10.20.30.10", "10.20.30.11"})
        allocator = AddressAllocator(probe)

        assert allocator.allocate(make_range(10, 12), PREFIX) == "10.20.30.12"
        assert probe.probed == ["10.20.30.10", "10.20.30.11", "10.20.30.12"]

    def test_single_occupied_address(self) -> None:
        """Test range 5-5 fully occupied raises NoAvailableAddressError."""
        probe = FakeProbe(occupied={"10.20.30.5"})
        allocator = AddressAllocator(probe)

        with pytest.raises(NoAvailableAddressError, match=r"10\.20\.30\.5-5"):
            allocator.allocate(make_range(5, 5), PREFIX)
        assert probe.probed == ["10.20.30.5"]

    def test_lowest_free_wins(self) -> None:
        """Test that the lowest free address is chosen among several."""
        probe = FakeProbe(occupied={"10.20.30.20"})
        allocator = AddressAllocator(probe)

        assert allocator.allocate(make_range(20, 29), PREFIX) == "10.20.30.21"

    def test_stops_at_first_free(self) -> None:
        """Test that no probe is issued after a free address is found."""
        probe = FakeProbe()
        allocator = AddressAllocator(probe)

        assert allocator.allocate(make_range(100, 200), PREFIX) == "10.20.30.100"
        assert probe.probed == ["10.20.30.100"]

    def test_exhausted_range_probes_everything_once(self) -> None:
        """Test that an exhausted range probes each candidate exactly once."""
        occupied = {f"{PREFIX}{n}" for n in range(30, 35)}
        probe = FakeProbe(occupied=occupied)
        allocator = AddressAllocator(probe)

        with pytest.raises(NoAvailableAddressError):
            allocator.allocate(make_range(30, 34), PREFIX)
        assert probe.probed == [f"{PREFIX}{n}" for n in range(30, 35)]

    @pytest.mark.parametrize(
        ("start", "end", "occupied_octets"),
        [
            (0, 0, set()),
            (1, 6, {1, 2, 4}),
            (1, 6, {2, 3, 5}),
            (250, 255, {250, 251, 252, 253, 254}),
            (40, 43, {40, 41, 42, 43}),
        ],
    )
    def test_matches_oracle(self, start: int, end: int, occupied_octets: set[int]) -> None:
        """Test allocate returns the smallest free octet, or raises iff none is free."""
        probe = FakeProbe(occupied={f"{PREFIX}{n}" for n in occupied_octets})
        allocator = AddressAllocator(probe)
        free = [n for n in range(start, end + 1) if n not in occupied_octets]

        if free:
            assert allocator.allocate(make_range(start, end), PREFIX) == f"{PREFIX}{free[0]}"
        else:
            with pytest.raises(NoAvailableAddressError):
                allocator.allocate(make_range(start, end), PREFIX)

        probed_octets = [int(address.rsplit(".", 1)[1]) for address in probe.probed]
        assert all(start <= n <= end for n in probed_octets)
        assert probed_octets == sorted(probed_octets)

    def test_every_occupancy_pattern(self) -> None:
        """Test all occupancy patterns of a small range against the oracle."""
        octets = [7, 8, 9]
        for pattern in itertools.product([True, False], repeat=len(octets)):
            occupied = {f"{PREFIX}{n}" for n, busy in zip(octets, pattern) if busy}
            allocator = AddressAllocator(FakeProbe(occupied=occupied))
            free = [n for n, busy in zip(octets, pattern) if not busy]

            if free:
                assert allocator.allocate(make_range(7, 9), PREFIX) == f"{PREFIX}{free[0]}"
            else:
                with pytest.raises(NoAvailableAddressError):
                    allocator.allocate(make_range(7, 9), PREFIX)

    def test_probe_error_propagates(self) -> None:
        """Test that an unsupported-platform probe aborts the scan."""

        class UnsupportedProbe:
            def is_alive(self, address: str) -> bool:
                raise UnsupportedPlatformError("Cannot probe")

        allocator = AddressAllocator(UnsupportedProbe())
        with pytest.raises(UnsupportedPlatformError):
            allocator.allocate(make_range(1, 3), PREFIX)

    def test_logs_selection(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that the selected address is logged."""
        allocator = AddressAllocator(FakeProbe(occupied={"10.20.30.10"}))

        with caplog.at_level(logging.DEBUG):
            allocator.allocate(make_range(10, 12), PREFIX)

        assert "10.20.30.10 is in use" in caplog.text
        assert "Selected free address 10.20.30.11" in caplog.text
