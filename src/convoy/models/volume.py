"""Volume specification models."""

from typing import Dict
from pydantic import BaseModel, ConfigDict, Field


class VolumeSpec(BaseModel):
    """Volume specification."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: str = Field(..., alias="Name", min_length=1, description="Volume name")
    driver: str = Field(default="local", alias="Driver")
    driver_opts: Dict[str, str] = Field(default_factory=dict, alias="DriverOpts")
    labels: Dict[str, str] = Field(default_factory=dict, alias="Labels")
