"""Shared fixtures: an in-memory runtime and desired state builders."""

from typing import Dict, List, Optional, Tuple

import pytest

from convoy.models import ContainerSpec, DesiredState, NetworkSpec, VolumeSpec
from convoy.runtime.base import ContainerInfo, NetworkInfo, RuntimeClient, RuntimeClientError


class FakeRuntimeClient(RuntimeClient):
    """In-memory runtime recording every call."""

    def __init__(self):
        self.volumes: Dict[str, VolumeSpec] = {}
        self.networks: Dict[str, NetworkInfo] = {}
        self.containers: Dict[str, ContainerInfo] = {}
        self.calls: List[Tuple] = []
        self.failures: Dict[Tuple[str, Optional[str]], Exception] = {}
        self.pull_output = [b'{"status": "Pulling from library/nginx", "id": "latest"}\n',
                            b'{"status": "Status: Image is up to date"}\n']
        self._ids = 0

    def fail(self, method: str, key: Optional[str] = None, message: str = "boom"):
        self.failures[(method, key)] = RuntimeClientError(message)

    def _record(self, method: str, *args, key: Optional[str] = None):
        self.calls.append((method, *args))
        for candidate in ((method, key), (method, None)):
            if candidate in self.failures:
                raise self.failures[candidate]

    def _new_id(self, prefix: str) -> str:
        self._ids += 1
        return f"{prefix}-{self._ids}"

    def calls_to(self, method: str) -> List[Tuple]:
        return [call for call in self.calls if call[0] == method]

    def mutating_calls(self) -> List[Tuple]:
        return [call for call in self.calls if not call[0].startswith(("list_", "ping"))]

    def add_container(self, name: str, state: str = "running", container_id: Optional[str] = None):
        container_id = container_id or f"{name}-id"
        self.containers[container_id] = ContainerInfo(id=container_id, names=[f"/{name}"], state=state)
        return container_id

    async def ping(self):
        self._record("ping")

    async def create_volume(self, spec):
        self._record("create_volume", spec.name, key=spec.name)
        self.volumes[spec.name] = spec
        return spec.name

    async def list_networks(self):
        self._record("list_networks")
        return list(self.networks.values())

    async def create_network(self, name, spec):
        self._record("create_network", name, key=name)
        network_id = self._new_id("net")
        self.networks[name] = NetworkInfo(id=network_id, name=name)
        return network_id, ""

    async def pull_image(self, image_ref):
        self._record("pull_image", image_ref, key=image_ref)
        return iter(self.pull_output)

    async def list_containers(self, include_stopped=True):
        self._record("list_containers", include_stopped)
        return [ContainerInfo(c.id, list(c.names), c.state) for c in self.containers.values()]

    async def stop_container(self, container_id, timeout):
        self._record("stop_container", container_id, timeout, key=container_id)
        self.containers[container_id].state = "exited"

    async def remove_container(self, container_id, force=True):
        self._record("remove_container", container_id, force, key=container_id)
        del self.containers[container_id]

    async def create_container(self, config, host_config, networking_config, name):
        self._record("create_container", name, key=name)
        container_id = self._new_id(name)
        self.containers[container_id] = ContainerInfo(id=container_id, names=[f"/{name}"], state="created")
        return container_id, []

    async def start_container(self, container_id):
        self._record("start_container", container_id, key=container_id)
        self.containers[container_id].state = "running"


def container_spec(name: str, image: str = "nginx:latest", **config) -> ContainerSpec:
    return ContainerSpec.model_validate({"name": name, "Config": {"Image": image, **config}})


def desired_state(volumes=(), networks=None, containers=()) -> DesiredState:
    return DesiredState(
        volumes=[VolumeSpec(name=name) for name in volumes],
        networks={
            name: NetworkSpec.model_validate({"name": name, **(spec or {})})
            for name, spec in (networks or {}).items()
        },
        containers={spec.name: spec for spec in containers},
    )


@pytest.fixture
def runtime():
    """In-memory runtime client."""
    return FakeRuntimeClient()
