"""Platform network configurators.

Each configurator turns a StaticAddressRequest into persisted, active network
configuration for one operating system. The variant is chosen once at
startup by select_configurator().
"""

from store_netconfig.configurators.base import (
    ConfigurationResult,
    ConfiguratorState,
    NetworkConfigurator,
    StaticAddressRequest,
)
from store_netconfig.configurators.netplan import NetplanConfigurator
from store_netconfig.configurators.powershell import PowerShellConfigurator
from store_netconfig.errors import UnsupportedPlatformError
from store_netconfig.hostos import HostPlatform
from store_netconfig.models import Settings
from store_netconfig.runner import CommandRunner


class UnsupportedPlatformConfigurator(NetworkConfigurator):
    """Configurator for hosts with no supported network tooling.

    Fails immediately without writing anything.
    """

    def __init__(self, host: HostPlatform) -> None:
        super().__init__()
        self.platform_name = host.value

    def render(self, request: StaticAddressRequest) -> list[str]:
        raise self._error()

    def _apply(self, request: StaticAddressRequest) -> None:
        raise self._error()

    def _error(self) -> UnsupportedPlatformError:
        return UnsupportedPlatformError(f"Unsupported operating system '{self.platform_name}'")


def select_configurator(
    host: HostPlatform,
    settings: Settings | None = None,
    runner: CommandRunner | None = None,
) -> NetworkConfigurator:
    """Return the configurator for a host platform.

    Args:
        host: Detected host platform
        settings: Run settings supplying paths and interface names (defaults if None)
        runner: Command runner shared by the configurator

    Returns:
        NetworkConfigurator for the platform
    """
    settings = settings or Settings()

    if host == HostPlatform.LINUX:
        return NetplanConfigurator(
            path=settings.netplan_path,
            interface=settings.linux_interface,
            runner=runner,
        )
    if host == HostPlatform.WINDOWS:
        return PowerShellConfigurator(interface_alias=settings.windows_interface, runner=runner)
    return UnsupportedPlatformConfigurator(host)


__all__ = [
    "ConfigurationResult",
    "ConfiguratorState",
    "NetplanConfigurator",
    "NetworkConfigurator",
    "PowerShellConfigurator",
    "StaticAddressRequest",
    "UnsupportedPlatformConfigurator",
    "select_configurator",
]
