"""Pydantic models for configuration and validation."""

from convoy.models.config import AgentConfig
from convoy.models.container import (
    ContainerSpec,
    HostConfig,
    LogConfigSpec,
    NetworkingConfig,
    RestartPolicySpec,
    RuntimeConfig,
)
from convoy.models.network import IPAMPoolSpec, IPAMSpec, NetworkSpec
from convoy.models.state import DesiredState
from convoy.models.volume import VolumeSpec

__all__ = [
    "AgentConfig",
    "ContainerSpec",
    "HostConfig",
    "LogConfigSpec",
    "NetworkingConfig",
    "RestartPolicySpec",
    "RuntimeConfig",
    "IPAMPoolSpec",
    "IPAMSpec",
    "NetworkSpec",
    "DesiredState",
    "VolumeSpec",
]
