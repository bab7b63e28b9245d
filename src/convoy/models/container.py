"""Container specification models.

The three option bundles mirror the Docker Engine API payload of
``POST /containers/create``. Commonly used parameters are declared so they
are validated; anything else is passed through to the daemon untouched.
"""

import re
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


CONTAINER_NAME_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$")


class RestartPolicySpec(BaseModel):
    """Container restart policy."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    name: str = Field(default="no", alias="Name")
    maximum_retry_count: Optional[int] = Field(None, alias="MaximumRetryCount")


class LogConfigSpec(BaseModel):
    """Log driver configuration."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    type: str = Field(default="json-file", alias="Type")
    config: Dict[str, str] = Field(default_factory=dict, alias="Config")


class RuntimeConfig(BaseModel):
    """Container runtime parameters (the ``Config`` bundle)."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    image: str = Field(..., alias="Image", min_length=1, description="Image reference")
    cmd: Optional[List[str]] = Field(None, alias="Cmd")
    entrypoint: Optional[List[str]] = Field(None, alias="Entrypoint")
    env: Optional[List[str]] = Field(None, alias="Env")
    exposed_ports: Optional[Dict[str, Dict[str, Any]]] = Field(None, alias="ExposedPorts")
    labels: Optional[Dict[str, str]] = Field(None, alias="Labels")
    working_dir: Optional[str] = Field(None, alias="WorkingDir")
    user: Optional[str] = Field(None, alias="User")
    tty: Optional[bool] = Field(None, alias="Tty")


class HostConfig(BaseModel):
    """Host-side parameters (the ``HostConfig`` bundle)."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    binds: Optional[List[str]] = Field(None, alias="Binds")
    port_bindings: Optional[Dict[str, List[Dict[str, str]]]] = Field(None, alias="PortBindings")
    privileged: Optional[bool] = Field(None, alias="Privileged")
    restart_policy: Optional[RestartPolicySpec] = Field(None, alias="RestartPolicy")
    log_config: Optional[LogConfigSpec] = Field(None, alias="LogConfig")
    network_mode: Optional[str] = Field(None, alias="NetworkMode")


class NetworkingConfig(BaseModel):
    """Network endpoint attachments (the ``NetworkingConfig`` bundle)."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    endpoints_config: Optional[Dict[str, Dict[str, Any]]] = Field(None, alias="EndpointsConfig")


def to_api(bundle: BaseModel) -> Dict[str, Any]:
    """Render a bundle as a Docker Engine API payload."""
    return bundle.model_dump(by_alias=True, exclude_none=True)


class ContainerSpec(BaseModel):
    """Container specification."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: str = Field(..., description="Container name")
    config: RuntimeConfig = Field(..., alias="Config")
    host_config: HostConfig = Field(default_factory=HostConfig, alias="HostConfig")
    networking_config: NetworkingConfig = Field(
        default_factory=NetworkingConfig, alias="NetworkingConfig"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Container names must be usable as Docker display names."""
        if not CONTAINER_NAME_RE.match(v):
            raise ValueError(f"Invalid container name: {v!r}")
        return v

    @property
    def image(self) -> str:
        return self.config.image
