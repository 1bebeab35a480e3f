"""Network description models published by the configuration service."""

from ipaddress import IPv4Address
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from store_netconfig.models.config import Role


class AddressRange(BaseModel):
    """Inclusive range of last-octet values reserved for one role.

    The service uses the JSON keys ``from`` and ``to``; they are exposed here
    as ``start`` and ``end`` since ``from`` is a Python keyword.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: Annotated[int, Field(alias="from", ge=0, le=255, description="First octet value")]
    end: Annotated[int, Field(alias="to", ge=0, le=255, description="Last octet value")]

    @model_validator(mode="after")
    def validate_order(self) -> "AddressRange":
        """Validate that the range is not reversed."""
        if self.start > self.end:
            raise ValueError(f"Range start {self.start} is greater than end {self.end}")
        return self

    def octets(self) -> range:
        """Return the last-octet values in ascending order."""
        return range(self.start, self.end + 1)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


class Subnet(BaseModel):
    """Representative subnet address and CIDR prefix length."""

    model_config = ConfigDict(frozen=True)

    ip: str = Field(description="Address whose first three octets form the network prefix")
    mask: Annotated[int, Field(ge=0, le=32, description="CIDR prefix length")]

    @field_validator("ip")
    @classmethod
    def validate_ip(cls, v: str) -> str:
        """Validate that the address has at least three numeric octets."""
        parts = v.strip().split(".")
        if len(parts) < 3:
            raise ValueError("Subnet address must contain at least three dot-separated octets")

        for part in parts[:3]:
            if not part.isdigit() or not 0 <= int(part) <= 255:
                raise ValueError(f"Invalid octet '{part}' in subnet address '{v}'")

        return v.strip()

    @property
    def prefix(self) -> str:
        """Return the 3-octet network prefix with a trailing dot (e.g. ``10.1.2.``)."""
        return ".".join(self.ip.split(".")[:3]) + "."


class NetworkInfo(BaseModel):
    """Network layout for one store.

    Holds the per-role address ranges together with the settings shared by
    every statically configured host (subnet, DNS servers, gateway).
    """

    model_config = ConfigDict(frozen=True)

    server: AddressRange
    pos: AddressRange
    kds: AddressRange
    failover: AddressRange
    nameservers: Annotated[
        list[IPv4Address], Field(default_factory=list, description="DNS servers in order")
    ]
    subnet: Subnet
    gateway: IPv4Address
    dhcp: Annotated[bool, Field(False, description="Hosts are managed by DHCP")]

    def range_for(self, role: Role) -> AddressRange:
        """Return the address range reserved for a role."""
        ranges = {
            Role.SERVER: self.server,
            Role.POS: self.pos,
            Role.KDS: self.kds,
            Role.FAILOVER: self.failover,
        }
        return ranges[role]

    def to_json_dict(self) -> dict[str, object]:
        """Encode using the service's literal JSON keys."""
        return self.model_dump(mode="json", by_alias=True)


class StoreRecord(BaseModel):
    """One element of the configuration service response array."""

    model_config = ConfigDict(frozen=True)

    network: NetworkInfo
