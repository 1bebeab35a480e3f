"""Liveness probing of candidate addresses.

A candidate is considered occupied when it answers a single ICMP echo request
within about one second. One short probe is fast but can report a busy
address as free after transient packet loss; that approximation is accepted
for provisioning-time use.
"""

import logging
from typing import Protocol

from store_netconfig.errors import UnsupportedPlatformError
from store_netconfig.hostos import HostPlatform
from store_netconfig.runner import CommandError, CommandRunner

logger = logging.getLogger(__name__)

# Extra time granted to the ping process beyond its own reply timeout
PROCESS_GRACE_SECONDS = 4.0

# Windows ping exits 0 when a gateway relays "Destination host unreachable",
# so a real echo reply is recognized by its TTL field.
WINDOWS_REPLY_MARKER = "TTL="


class LivenessProbe(Protocol):
    """Reachability check for a single address."""

    def is_alive(self, address: str) -> bool:
        """Return True if the address answered (i.e. it is in use)."""
        ...


class PingProbe:
    """LivenessProbe backed by the operating system's ping command."""

    def __init__(
        self,
        host: HostPlatform,
        runner: CommandRunner | None = None,
        timeout_seconds: int = 1,
    ) -> None:
        """Initialize the probe.

        Args:
            host: Platform whose ping syntax should be used
            runner: Command runner (a default CommandRunner if None)
            timeout_seconds: How long to wait for the echo reply
        """
        self.host = host
        self.runner = runner or CommandRunner()
        self.timeout_seconds = timeout_seconds

    def command(self, address: str) -> list[str]:
        """Build the ping command line for an address.

        Raises:
            UnsupportedPlatformError: If the host platform has no ping syntax
        """
        if self.host == HostPlatform.WINDOWS:
            return ["ping", "-n", "1", "-w", str(self.timeout_seconds * 1000), address]
        if self.host == HostPlatform.LINUX:
            return ["ping", "-c", "1", "-W", str(self.timeout_seconds), address]
        if self.host == HostPlatform.DARWIN:
            # BSD ping takes -W in milliseconds
            return ["ping", "-c", "1", "-W", str(self.timeout_seconds * 1000), address]
        raise UnsupportedPlatformError(f"Cannot probe addresses on platform '{self.host.value}'")

    def is_alive(self, address: str) -> bool:
        """Send one echo request and report whether a reply came back.

        Any execution error, timeout or non-zero exit counts as no reply.

        Raises:
            UnsupportedPlatformError: If the host platform has no ping syntax
        """
        cmd = self.command(address)

        try:
            result = self.runner.run(cmd, timeout=self.timeout_seconds + PROCESS_GRACE_SECONDS)
        except CommandError as e:
            logger.debug("No reply from %s: %s", address, e)
            return False

        if self.host == HostPlatform.WINDOWS and WINDOWS_REPLY_MARKER not in result.stdout:
            logger.debug("No echo reply from %s (unreachable)", address)
            return False

        return True
