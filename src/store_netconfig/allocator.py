"""Static address allocation from a role's range."""

import logging
from collections.abc import Iterator

from store_netconfig.errors import NoAvailableAddressError
from store_netconfig.models import AddressRange
from store_netconfig.probe import LivenessProbe

logger = logging.getLogger(__name__)


class AddressAllocator:
    """Pick the lowest free address in a range.

    Candidates are probed one at a time in ascending order and the first one
    that does not answer is returned. No probe is issued past that candidate
    or outside the range.
    """

    def __init__(self, probe: LivenessProbe) -> None:
        self.probe = probe

    @staticmethod
    def candidates(address_range: AddressRange, prefix: str) -> Iterator[str]:
        """Yield candidate addresses in ascending order.

        Args:
            address_range: Inclusive range of last-octet values
            prefix: Network prefix with trailing dot (e.g. "10.1.2.")
        """
        for octet in address_range.octets():
            yield f"{prefix}{octet}"

    def allocate(self, address_range: AddressRange, prefix: str) -> str:
        """Return the first address in the range that is not in use.

        Args:
            address_range: Inclusive range of last-octet values
            prefix: Network prefix with trailing dot (e.g. "10.1.2.")

        Returns:
            The selected address

        Raises:
            NoAvailableAddressError: If every candidate answered the probe
            UnsupportedPlatformError: If the probe cannot run on this host
        """
        logger.info("Scanning %s%s for a free address", prefix, address_range)

        for address in self.candidates(address_range, prefix):
            if self.probe.is_alive(address):
                logger.debug("%s is in use", address)
                continue

            logger.info("Selected free address %s", address)
            return address

        raise NoAvailableAddressError(
            f"No free address in range {prefix}{address_range.start}-{address_range.end}"
        )
