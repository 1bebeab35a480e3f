"""Pydantic models for store network provisioning.

This module provides the data models for the network layout published by the
configuration service and for the runtime settings of a provisioning run.
"""

from store_netconfig.models.config import Role, Settings
from store_netconfig.models.network import AddressRange, NetworkInfo, StoreRecord, Subnet

__all__ = [
    # config
    "Role",
    "Settings",
    # network
    "AddressRange",
    "NetworkInfo",
    "StoreRecord",
    "Subnet",
]
