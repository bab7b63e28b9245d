"""
Convoy - declarative Docker resource reconciliation.

A small agent that keeps the volumes, networks and containers of a Docker
daemon in line with a periodically reloaded configuration document.
"""

__version__ = "1.0.0"
__author__ = "Convoy Development Team"

# Re-export key components for easier access
from convoy.models.config import AgentConfig
from convoy.models.container import ContainerSpec
from convoy.models.network import NetworkSpec
from convoy.models.state import DesiredState
from convoy.models.volume import VolumeSpec

__all__ = [
    "AgentConfig",
    "ContainerSpec",
    "NetworkSpec",
    "DesiredState",
    "VolumeSpec",
]
