"""Runtime settings and node roles."""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from store_netconfig.errors import UnknownRoleError

DEFAULT_NETPLAN_PATH = "/etc/netplan/99-custom.yaml"
DEFAULT_LINUX_INTERFACE = "eth0"
DEFAULT_WINDOWS_INTERFACE = "Ethernet"

# Environment variables read at startup
ENV_STORE = "STORE"
ENV_NODE_TYPE = "TYPENODE"
ENV_API_URL = "NETCONFIG_API_URL"
ENV_API_KEY = "NETCONFIG_API_KEY"


class Role(str, Enum):
    """Node role, each mapped to its own address range."""

    SERVER = "server"
    POS = "pos"
    KDS = "kds"
    FAILOVER = "failover"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Resolve a role selector string.

        Args:
            value: Selector as read from the environment (e.g. "pos")

        Returns:
            The matching Role

        Raises:
            UnknownRoleError: If the selector is missing or not a known role
        """
        if not value:
            raise UnknownRoleError("No node type given (set TYPENODE or --node-type)")

        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(role.value for role in cls)
            raise UnknownRoleError(
                f"Unknown machine type '{value}' (expected one of: {valid})"
            ) from None


class Settings(BaseModel):
    """Settings for one provisioning run.

    Built once at startup and passed explicitly to the components that need
    it. Nothing below the entry point reads the process environment.
    """

    model_config = ConfigDict(frozen=True)

    api_url: Annotated[str, Field("", description="Configuration service base URL")]
    api_key: Annotated[str | None, Field(None, description="Value for the X-API-KEY header")]
    store: Annotated[str, Field("", description="Store identifier appended to the URL")]
    node_type: Annotated[str | None, Field(None, description="Role selector")]
    http_timeout: Annotated[float, Field(10.0, gt=0, description="HTTP timeout in seconds")]
    netplan_path: Annotated[str, Field(DEFAULT_NETPLAN_PATH, description="Netplan file")]
    linux_interface: Annotated[str, Field(DEFAULT_LINUX_INTERFACE, min_length=1)]
    windows_interface: Annotated[str, Field(DEFAULT_WINDOWS_INTERFACE, min_length=1)]

    @classmethod
    def from_env(cls, environ: Mapping[str, str], **overrides: object) -> "Settings":
        """Build settings from environment variables.

        Overrides whose value is None are ignored, so parsed CLI arguments can
        be passed straight through.

        Args:
            environ: Environment mapping (usually os.environ)
            **overrides: Field values taking precedence over the environment

        Returns:
            Validated settings
        """
        values: dict[str, object] = {
            "api_url": environ.get(ENV_API_URL, ""),
            "api_key": environ.get(ENV_API_KEY) or None,
            "store": environ.get(ENV_STORE, ""),
            "node_type": environ.get(ENV_NODE_TYPE) or None,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(values)
