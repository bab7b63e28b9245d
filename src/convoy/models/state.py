"""Desired state aggregate."""

import hashlib
import json
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field

from convoy.models.container import ContainerSpec
from convoy.models.network import NetworkSpec
from convoy.models.volume import VolumeSpec


class DesiredState(BaseModel):
    """Everything declared by one load of the configuration document."""
    model_config = ConfigDict(frozen=True)

    volumes: List[VolumeSpec] = Field(default_factory=list)
    networks: Dict[str, NetworkSpec] = Field(default_factory=dict)
    containers: Dict[str, ContainerSpec] = Field(default_factory=dict)

    def fingerprint(self) -> str:
        """Return a stable digest of the declared resources."""
        canonical = json.dumps(
            self.model_dump(mode="json", by_alias=True, exclude_none=True),
            sort_keys=True,
        )
        return hashlib.sha256(canonical.encode()).hexdigest()

    def summary(self) -> str:
        return (
            f"{len(self.volumes)} volume(s), {len(self.networks)} network(s), "
            f"{len(self.containers)} container(s)"
        )
