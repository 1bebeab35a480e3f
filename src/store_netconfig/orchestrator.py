"""Provisioning flow: fetch, allocate, configure."""

import logging

from store_netconfig.allocator import AddressAllocator
from store_netconfig.configurators import (
    ConfigurationResult,
    NetworkConfigurator,
    StaticAddressRequest,
)
from store_netconfig.models import Role, Settings
from store_netconfig.provider import ConfigProvider

logger = logging.getLogger(__name__)


class Orchestrator:
    """Wire the provisioning steps together for one run.

    Errors from any step propagate to the caller as ProvisioningError
    subclasses; a configurator failure comes back as a FAILED result.
    """

    def __init__(
        self,
        settings: Settings,
        provider: ConfigProvider,
        allocator: AddressAllocator,
        configurator: NetworkConfigurator,
        dry_run: bool = False,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Run settings (store and node type are used here)
            provider: Source of the store's NetworkInfo
            allocator: Allocator used to pick a free address
            configurator: Configurator for the host platform
            dry_run: If True, log the planned configuration instead of applying it
        """
        self.settings = settings
        self.provider = provider
        self.allocator = allocator
        self.configurator = configurator
        self.dry_run = dry_run

    def run(self) -> ConfigurationResult | None:
        """Provision a static address for this host.

        Returns:
            The configuration result, or None if the store uses DHCP and
            static configuration was skipped

        Raises:
            ConfigFetchError: If the network layout cannot be fetched
            UnknownRoleError: If the node type is missing or unknown
            NoAvailableAddressError: If the role's range has no free address
            UnsupportedPlatformError: If addresses cannot be probed on this
                host, or a dry run is planned for an unsupported platform
        """
        network = self.provider.fetch(self.settings.store)
        role = Role.parse(self.settings.node_type)

        if network.dhcp:
            logger.info("DHCP configured for store; skipping static configuration")
            return None

        address_range = network.range_for(role)
        logger.info("Node type %s uses range %s", role.value, address_range)
        address = self.allocator.allocate(address_range, network.subnet.prefix)

        request = StaticAddressRequest(
            address=address,
            mask=network.subnet.mask,
            nameservers=tuple(str(ns) for ns in network.nameservers),
            gateway=str(network.gateway),
        )

        logger.info("Configuring static IP")
        logger.info("Address: %s", request.cidr)
        logger.info("Name servers: %s", ", ".join(request.nameservers) or "(none)")
        logger.info("Gateway: %s", request.gateway)

        if self.dry_run:
            logger.info(
                "Dry run - %s configuration that would be applied:",
                self.configurator.platform_name,
            )
            for line in self.configurator.render(request):
                logger.info("  %s", line)
            return ConfigurationResult.configured(address, applied=False)

        return self.configurator.apply(request)
