"""Static IP provisioning for store hosts."""

from store_netconfig.allocator import AddressAllocator
from store_netconfig.orchestrator import Orchestrator
from store_netconfig.provider import ConfigProvider

__version__ = "0.1.0"

__all__ = [
    "AddressAllocator",
    "ConfigProvider",
    "Orchestrator",
    "__version__",
]
