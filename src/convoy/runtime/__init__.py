"""Container runtime clients for convoy."""

from convoy.runtime.base import (
    ContainerInfo,
    NetworkInfo,
    RuntimeClient,
    RuntimeClientError,
    strip_name,
)
from convoy.runtime.docker import DockerRuntimeClient

__all__ = [
    "ContainerInfo",
    "NetworkInfo",
    "RuntimeClient",
    "RuntimeClientError",
    "strip_name",
    "DockerRuntimeClient",
]
