"""Linux configurator using netplan.

Writes a declarative single-interface definition and lets netplan reconcile
the running network state with it.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from store_netconfig.configurators.base import NetworkConfigurator, StaticAddressRequest
from store_netconfig.errors import ConfigurationApplyError
from store_netconfig.models.config import DEFAULT_LINUX_INTERFACE, DEFAULT_NETPLAN_PATH
from store_netconfig.runner import CommandError, CommandRunner

logger = logging.getLogger(__name__)

NETPLAN_FILE_MODE = 0o644


class NetplanConfigurator(NetworkConfigurator):
    """Configure a static address through a netplan YAML file."""

    platform_name = "linux"

    def __init__(
        self,
        path: str | Path = DEFAULT_NETPLAN_PATH,
        interface: str = DEFAULT_LINUX_INTERFACE,
        runner: CommandRunner | None = None,
    ) -> None:
        """Initialize the configurator.

        Args:
            path: Netplan file to overwrite
            interface: Ethernet interface to configure
            runner: Command runner (a default CommandRunner if None)
        """
        super().__init__()
        self.path = Path(path)
        self.interface = interface
        self.runner = runner or CommandRunner()

    def document(self, request: StaticAddressRequest) -> dict[str, Any]:
        """Build the netplan document for a request."""
        return {
            "network": {
                "version": 2,
                "renderer": "networkd",
                "ethernets": {
                    self.interface: {
                        "dhcp4": False,
                        "addresses": [request.cidr],
                        "gateway4": request.gateway,
                        "nameservers": {"addresses": list(request.nameservers)},
                    }
                },
            }
        }

    def render_text(self, request: StaticAddressRequest) -> str:
        """Render the netplan file content.

        Identical requests always produce identical text.
        """
        return yaml.safe_dump(self.document(request), default_flow_style=False, sort_keys=False)

    def render(self, request: StaticAddressRequest) -> list[str]:
        return [f"# {self.path}", *self.render_text(request).splitlines(), "netplan apply"]

    def write_atomic(self, content: str) -> None:
        """Replace the netplan file so readers see either the old or the new content.

        The temporary file lives beside the target so os.replace stays on one
        filesystem.
        """
        tmp_path: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp_file:
                tmp_path = tmp_file.name
                tmp_file.write(content)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.chmod(tmp_path, NETPLAN_FILE_MODE)
            os.replace(tmp_path, self.path)
        except OSError:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            raise

    def _apply(self, request: StaticAddressRequest) -> None:
        content = self.render_text(request)

        logger.debug("Writing netplan configuration to %s", self.path)
        try:
            self.write_atomic(content)
        except OSError as e:
            raise ConfigurationApplyError(
                f"Error writing netplan configuration file {self.path}: {e}"
            ) from e

        try:
            self.runner.run(["netplan", "apply"])
        except CommandError as e:
            raise ConfigurationApplyError(f"Error applying netplan configuration: {e}") from e

        logger.info("Static IP configured on %s using netplan", self.interface)
