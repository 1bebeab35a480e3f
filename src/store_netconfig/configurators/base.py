"""Base class for platform network configurators."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from store_netconfig.errors import (
    ConfigurationApplyError,
    ProvisioningError,
    UnsupportedPlatformError,
)

logger = logging.getLogger(__name__)


class ConfiguratorState(Enum):
    """Lifecycle of a configurator within one run."""

    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    CONFIGURED = "configured"  # terminal
    FAILED = "failed"  # terminal


@dataclass(frozen=True)
class StaticAddressRequest:
    """Static addressing to apply to the host's interface.

    Attributes:
        address: IPv4 address selected for the host
        mask: CIDR prefix length
        nameservers: DNS servers, in priority order
        gateway: Default gateway
    """

    address: str
    mask: int
    nameservers: tuple[str, ...] = field(default_factory=tuple)
    gateway: str = ""

    @property
    def cidr(self) -> str:
        """Return the address in CIDR notation."""
        return f"{self.address}/{self.mask}"


@dataclass(frozen=True)
class ConfigurationResult:
    """Terminal outcome of a configuration attempt.

    Attributes:
        state: CONFIGURED or FAILED
        address: Address that was (or would have been) configured
        error: Failure reason when state is FAILED
        applied: False when the configuration was only planned (dry run)
    """

    state: ConfiguratorState
    address: str | None = None
    error: ProvisioningError | None = None
    applied: bool = True

    @classmethod
    def configured(cls, address: str, applied: bool = True) -> "ConfigurationResult":
        return cls(state=ConfiguratorState.CONFIGURED, address=address, applied=applied)

    @classmethod
    def failed(cls, error: ProvisioningError, address: str | None = None) -> "ConfigurationResult":
        return cls(state=ConfiguratorState.FAILED, address=address, error=error, applied=False)

    @property
    def ok(self) -> bool:
        return self.state == ConfiguratorState.CONFIGURED


class NetworkConfigurator(ABC):
    """Persist and activate a static address on one platform.

    Subclasses implement render() and _apply(); apply() drives the state
    machine and turns ConfigurationApplyError into a FAILED result. A
    configurator applies at most once: after reaching a terminal state,
    further apply() calls return the recorded result without side effects.
    """

    platform_name = "generic"

    def __init__(self) -> None:
        self.state = ConfiguratorState.UNCONFIGURED
        self.result: ConfigurationResult | None = None

    @abstractmethod
    def render(self, request: StaticAddressRequest) -> list[str]:
        """Return the file lines or commands apply() would use.

        Args:
            request: Addressing to apply

        Returns:
            Human-readable plan, one line per entry
        """
        pass

    @abstractmethod
    def _apply(self, request: StaticAddressRequest) -> None:
        """Write and activate the configuration.

        Raises:
            ConfigurationApplyError: If any step fails
            UnsupportedPlatformError: If the platform cannot be configured
        """
        pass

    def apply(self, request: StaticAddressRequest) -> ConfigurationResult:
        """Apply the configuration and record the outcome.

        Args:
            request: Addressing to apply

        Returns:
            CONFIGURED result on success, FAILED result carrying the
            ConfigurationApplyError (or UnsupportedPlatformError) otherwise
        """
        if self.result is not None:
            logger.warning(
                "%s configurator already %s; not applying again",
                self.platform_name,
                self.state.value,
            )
            return self.result

        self.state = ConfiguratorState.CONFIGURING
        logger.info("Applying static configuration %s (%s)", request.cidr, self.platform_name)

        try:
            self._apply(request)
        except (ConfigurationApplyError, UnsupportedPlatformError) as e:
            return self._finish(ConfigurationResult.failed(e, address=request.address))

        return self._finish(ConfigurationResult.configured(request.address))

    def _finish(self, result: ConfigurationResult) -> ConfigurationResult:
        self.state = result.state
        self.result = result
        return result
