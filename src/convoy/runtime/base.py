"""Base runtime client interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from convoy.models.network import NetworkSpec
from convoy.models.volume import VolumeSpec


# Docker reports container names with a leading separator, e.g. "/web".
NAME_SEPARATOR = "/"

STATE_RUNNING = "running"


class RuntimeClientError(Exception):
    """A call to the container runtime failed."""
    pass


def strip_name(name: str) -> Optional[str]:
    """Return a runtime display name without its leading separator.

    Returns None for names that are empty once the separator is removed.
    """
    if name.startswith(NAME_SEPARATOR):
        name = name[len(NAME_SEPARATOR):]
    return name or None


@dataclass
class NetworkInfo:
    """An existing network as reported by the runtime."""
    id: str
    name: str


@dataclass
class ContainerInfo:
    """An existing container as reported by the runtime."""
    id: str
    names: List[str] = field(default_factory=list)
    state: str = ""

    @property
    def primary_name(self) -> Optional[str]:
        """First display name with the separator stripped."""
        if not self.names:
            return None
        return strip_name(self.names[0])

    def display_names(self) -> List[str]:
        """All display names with the separator stripped."""
        stripped = (strip_name(name) for name in self.names)
        return [name for name in stripped if name]

    @property
    def is_running(self) -> bool:
        return self.state == STATE_RUNNING


class RuntimeClient(ABC):
    """Capability interface over a container runtime.

    Every method is a single blocking attempt from the caller's point of
    view and raises RuntimeClientError on failure.
    """

    @abstractmethod
    async def ping(self) -> None:
        """Check that the runtime is reachable."""
        pass

    @abstractmethod
    async def create_volume(self, spec: VolumeSpec) -> str:
        """Create a volume and return its name."""
        pass

    @abstractmethod
    async def list_networks(self) -> List[NetworkInfo]:
        """List existing networks."""
        pass

    @abstractmethod
    async def create_network(self, name: str, spec: NetworkSpec) -> Tuple[str, str]:
        """Create a network, returning its id and any runtime warning."""
        pass

    @abstractmethod
    async def pull_image(self, image_ref: str) -> Iterator[bytes]:
        """Start pulling an image and return the raw progress stream.

        The stream yields newline-delimited JSON records in arbitrary chunks.
        """
        pass

    @abstractmethod
    async def list_containers(self, include_stopped: bool = True) -> List[ContainerInfo]:
        """List existing containers."""
        pass

    @abstractmethod
    async def stop_container(self, container_id: str, timeout: int) -> None:
        """Stop a container, waiting up to timeout seconds before killing it."""
        pass

    @abstractmethod
    async def remove_container(self, container_id: str, force: bool = True) -> None:
        """Remove a container."""
        pass

    @abstractmethod
    async def create_container(
        self,
        config: Dict[str, Any],
        host_config: Dict[str, Any],
        networking_config: Dict[str, Any],
        name: str,
    ) -> Tuple[str, List[str]]:
        """Create a container, returning its id and runtime warnings."""
        pass

    @abstractmethod
    async def start_container(self, container_id: str) -> None:
        """Start a created container."""
        pass

    async def close(self) -> None:
        """Release the underlying connection."""
        pass
