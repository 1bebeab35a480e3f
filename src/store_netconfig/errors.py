"""Error taxonomy for store-netconfig.

Every failure during provisioning is terminal. Each exception class carries
the process exit code that the entry point reports for it, so business logic
only raises and never decides how the process ends.
"""


class ProvisioningError(Exception):
    """Base class for all provisioning failures.

    Attributes:
        exit_code: Process exit status reported for this error class.
    """

    exit_code = 1


class ConfigFetchError(ProvisioningError):
    """The configuration service could not be reached, or its reply was unusable."""

    exit_code = 2


class UnknownRoleError(ProvisioningError):
    """The node type selector is missing or not one of the known roles."""

    exit_code = 3


class NoAvailableAddressError(ProvisioningError):
    """Every address in the role's range answered the liveness probe."""

    exit_code = 4


class UnsupportedPlatformError(ProvisioningError):
    """The host operating system has no probe or configurator implementation."""

    exit_code = 5


class ConfigurationApplyError(ProvisioningError):
    """Writing or activating the network configuration failed."""

    exit_code = 6
