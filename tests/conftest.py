"""Pytest configuration and fixtures for store-netconfig tests."""

import subprocess
from collections.abc import Iterable
from typing import Any

import pytest

from store_netconfig.models import NetworkInfo, Settings
from store_netconfig.runner import CommandError


class FakeProbe:
    """LivenessProbe that answers from a fixed set of occupied addresses.

    Records every probed address in order.
    """

    def __init__(self, occupied: Iterable[str] = ()) -> None:
        self.occupied = set(occupied)
        self.probed: list[str] = []

    def is_alive(self, address: str) -> bool:
        self.probed.append(address)
        return address in self.occupied


class FakeRunner:
    """CommandRunner that records commands instead of executing them.

    Commands containing any string in ``failures`` raise CommandError;
    everything else succeeds with ``stdout``.
    """

    def __init__(self, stdout: str = "", failures: Iterable[str] = ()) -> None:
        self.stdout = stdout
        self.failures = list(failures)
        self.commands: list[list[str]] = []

    def run(
        self, args: list[str], timeout: float | None = None
    ) -> subprocess.CompletedProcess[str]:
        self.commands.append(args)
        joined = " ".join(args)
        for failure in self.failures:
            if failure in joined:
                raise CommandError(f"Command failed: {joined}", returncode=1, output="boom")
        return subprocess.CompletedProcess(args, 0, stdout=self.stdout, stderr="")


class FakeHttpClient:
    """HttpClient returning a canned payload (or raising an exception)."""

    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.requests: list[tuple[str, dict[str, str]]] = []

    def get_json(self, url: str, headers: dict[str, str]) -> Any:
        self.requests.append((url, headers))
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def network_payload() -> dict[str, Any]:
    """NetworkInfo document as published by the configuration service.

    Returns:
        Dictionary using the service's literal JSON keys
    """
    return {
        "server": {"from": 10, "to": 12},
        "pos": {"from": 20, "to": 29},
        "kds": {"from": 30, "to": 34},
        "failover": {"from": 5, "to": 5},
        "nameservers": ["10.20.30.1", "8.8.8.8"],
        "subnet": {"ip": "10.20.30.0", "mask": 24},
        "gateway": "10.20.30.1",
        "dhcp": False,
    }


@pytest.fixture
def service_response(network_payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Full configuration service response wrapping network_payload."""
    return [{"network": network_payload}]


@pytest.fixture
def network_info(network_payload: dict[str, Any]) -> NetworkInfo:
    """Validated NetworkInfo built from network_payload."""
    return NetworkInfo.model_validate(network_payload)


@pytest.fixture
def settings() -> Settings:
    """Settings for a POS node in store 0042."""
    return Settings(
        api_url="https://config.example.test/stores/",
        api_key="secret-token",
        store="0042",
        node_type="pos",
    )
