"""Network specification models."""

from typing import Dict, List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class IPAMPoolSpec(BaseModel):
    """A single IPAM address pool."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    subnet: Optional[str] = Field(None, alias="Subnet")
    ip_range: Optional[str] = Field(None, alias="IPRange")
    gateway: Optional[str] = Field(None, alias="Gateway")
    aux_addresses: Optional[Dict[str, str]] = Field(
        None,
        validation_alias=AliasChoices("AuxiliaryAddresses", "AuxAddress", "aux_addresses"),
        serialization_alias="AuxiliaryAddresses",
    )


class IPAMSpec(BaseModel):
    """IP address management for a network."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    driver: str = Field(default="default", alias="Driver")
    options: Optional[Dict[str, str]] = Field(None, alias="Options")
    config: List[IPAMPoolSpec] = Field(default_factory=list, alias="Config")


class NetworkSpec(BaseModel):
    """Network specification, keyed by name in the configuration document."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Network name")
    driver: str = Field(default="bridge", alias="Driver")
    check_duplicate: bool = Field(default=False, alias="CheckDuplicate")
    enable_ipv6: bool = Field(default=False, alias="EnableIPv6")
    internal: bool = Field(default=False, alias="Internal")
    attachable: bool = Field(default=False, alias="Attachable")
    ipam: Optional[IPAMSpec] = Field(None, alias="IPAM")
    options: Optional[Dict[str, str]] = Field(None, alias="Options")
    labels: Dict[str, str] = Field(default_factory=dict, alias="Labels")
