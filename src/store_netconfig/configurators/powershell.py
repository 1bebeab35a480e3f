"""Windows configurator using PowerShell networking cmdlets."""

import logging

from store_netconfig.configurators.base import NetworkConfigurator, StaticAddressRequest
from store_netconfig.errors import ConfigurationApplyError
from store_netconfig.models.config import DEFAULT_WINDOWS_INTERFACE
from store_netconfig.runner import CommandError, CommandRunner

logger = logging.getLogger(__name__)


def quote_argument(value: str) -> str:
    """Quote a value as a single-quoted PowerShell string literal."""
    return "'" + value.replace("'", "''") + "'"


class PowerShellConfigurator(NetworkConfigurator):
    """Configure a static address with New-NetIPAddress and Set-DnsClientServerAddress.

    These cmdlets are imperative: re-running against an interface that already
    holds the address fails, and that failure is reported rather than ignored.
    When the request has no nameservers, DNS settings are left untouched.
    """

    platform_name = "windows"

    def __init__(
        self,
        interface_alias: str = DEFAULT_WINDOWS_INTERFACE,
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__()
        self.interface_alias = interface_alias
        self.runner = runner or CommandRunner()

    def address_command(self, request: StaticAddressRequest) -> str:
        return (
            f"New-NetIPAddress -InterfaceAlias {quote_argument(self.interface_alias)} "
            f"-IPAddress {request.address} -PrefixLength {request.mask} "
            f"-DefaultGateway {request.gateway}"
        )

    def dns_command(self, request: StaticAddressRequest) -> str | None:
        """Return the DNS command, or None if there are no nameservers to set."""
        if not request.nameservers:
            return None
        return (
            f"Set-DnsClientServerAddress -InterfaceAlias {quote_argument(self.interface_alias)} "
            f"-ServerAddresses {','.join(request.nameservers)}"
        )

    def commands(self, request: StaticAddressRequest) -> list[str]:
        dns_command = self.dns_command(request)
        if dns_command is None:
            return [self.address_command(request)]
        return [self.address_command(request), dns_command]

    def render(self, request: StaticAddressRequest) -> list[str]:
        return self.commands(request)

    def _apply(self, request: StaticAddressRequest) -> None:
        address_command, *dns_commands = self.commands(request)
        if not dns_commands:
            logger.warning("No nameservers given; leaving DNS settings unchanged")

        try:
            self.runner.run(["powershell", "-Command", address_command])
        except CommandError as e:
            raise ConfigurationApplyError(f"Error configuring static IP on Windows: {e}") from e

        for dns_command in dns_commands:
            try:
                self.runner.run(["powershell", "-Command", dns_command])
            except CommandError as e:
                raise ConfigurationApplyError(
                    f"Error configuring DNS servers on Windows: {e}"
                ) from e

        logger.info("Static IP configured on %s using PowerShell", self.interface_alias)
