"""Runtime client backed by the Docker Engine API."""

import asyncio
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import docker
from docker.errors import DockerException
from docker.types import IPAMConfig, IPAMPool
from requests.exceptions import RequestException

from convoy.models.network import NetworkSpec
from convoy.models.volume import VolumeSpec
from convoy.runtime.base import ContainerInfo, NetworkInfo, RuntimeClient, RuntimeClientError


logger = logging.getLogger(__name__)

CLIENT_ERRORS = (DockerException, RequestException)


class DockerRuntimeClient(RuntimeClient):
    """RuntimeClient over the low-level docker SDK API.

    The SDK is synchronous; every call is offloaded to a worker thread so
    the agent's event loop stays responsive to signals.
    """

    def __init__(self, api_version: str = "auto", api: Optional[docker.APIClient] = None):
        """Initialize runtime client."""
        self.api_version = api_version
        self._api = api

    @property
    def api(self) -> docker.APIClient:
        if self._api is None:
            raise RuntimeClientError("Docker client is not connected")
        return self._api

    async def connect(self) -> None:
        """Build the API client from the environment (DOCKER_HOST etc.)."""
        if self._api is not None:
            return

        def _build() -> docker.APIClient:
            kwargs = docker.utils.kwargs_from_env()
            return docker.APIClient(version=self.api_version, **kwargs)

        try:
            self._api = await asyncio.to_thread(_build)
        except CLIENT_ERRORS as e:
            raise RuntimeClientError(f"Cannot connect to Docker: {e}") from e
        logger.info(f"Connected to Docker API version {self._api.api_version}")

    async def _call(self, action: str, func: Callable[..., Any], *args, **kwargs) -> Any:
        """Run one SDK call in a thread, translating SDK errors."""
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except CLIENT_ERRORS as e:
            raise RuntimeClientError(f"{action} failed: {e}") from e

    async def ping(self) -> None:
        await self._call("ping", self.api.ping)

    async def create_volume(self, spec: VolumeSpec) -> str:
        result = await self._call(
            f"create volume {spec.name}",
            self.api.create_volume,
            name=spec.name,
            driver=spec.driver,
            driver_opts=spec.driver_opts or None,
            labels=spec.labels or None,
        )
        return result.get("Name", spec.name)

    async def list_networks(self) -> List[NetworkInfo]:
        networks = await self._call("list networks", self.api.networks)
        return [NetworkInfo(id=net.get("Id", ""), name=net.get("Name", "")) for net in networks]

    async def create_network(self, name: str, spec: NetworkSpec) -> Tuple[str, str]:
        ipam = None
        if spec.ipam is not None:
            ipam = IPAMConfig(
                driver=spec.ipam.driver,
                pool_configs=[
                    IPAMPool(
                        subnet=pool.subnet,
                        iprange=pool.ip_range,
                        gateway=pool.gateway,
                        aux_addresses=pool.aux_addresses,
                    )
                    for pool in spec.ipam.config
                ],
                options=spec.ipam.options,
            )

        result = await self._call(
            f"create network {name}",
            self.api.create_network,
            name,
            driver=spec.driver,
            options=spec.options,
            ipam=ipam,
            check_duplicate=spec.check_duplicate,
            internal=spec.internal,
            labels=spec.labels or None,
            enable_ipv6=spec.enable_ipv6,
            attachable=spec.attachable,
        )
        return result.get("Id", ""), result.get("Warning") or ""

    async def pull_image(self, image_ref: str) -> Iterator[bytes]:
        stream = await self._call(
            f"pull image {image_ref}", self.api.pull, image_ref, stream=True
        )
        return self._guard_stream(image_ref, stream)

    @staticmethod
    def _guard_stream(image_ref: str, stream: Iterator[bytes]) -> Iterator[bytes]:
        """Translate SDK errors raised while the stream is being read."""
        try:
            for chunk in stream:
                yield chunk
        except CLIENT_ERRORS as e:
            raise RuntimeClientError(f"pull image {image_ref} failed: {e}") from e
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                close()

    async def list_containers(self, include_stopped: bool = True) -> List[ContainerInfo]:
        containers = await self._call(
            "list containers", self.api.containers, all=include_stopped
        )
        return [
            ContainerInfo(
                id=item.get("Id", ""),
                names=list(item.get("Names") or []),
                state=item.get("State", ""),
            )
            for item in containers
        ]

    async def stop_container(self, container_id: str, timeout: int) -> None:
        await self._call(
            f"stop container {container_id}", self.api.stop, container_id, timeout=timeout
        )

    async def remove_container(self, container_id: str, force: bool = True) -> None:
        await self._call(
            f"remove container {container_id}",
            self.api.remove_container,
            container_id,
            force=force,
        )

    async def create_container(
        self,
        config: Dict[str, Any],
        host_config: Dict[str, Any],
        networking_config: Dict[str, Any],
        name: str,
    ) -> Tuple[str, List[str]]:
        # The create endpoint takes the host and networking bundles nested
        # inside the container config body.
        body = dict(config)
        body["HostConfig"] = host_config
        body["NetworkingConfig"] = networking_config

        result = await self._call(
            f"create container {name}",
            self.api.create_container_from_config,
            body,
            name=name,
        )
        return result.get("Id", ""), list(result.get("Warnings") or [])

    async def start_container(self, container_id: str) -> None:
        await self._call(f"start container {container_id}", self.api.start, container_id)

    async def close(self) -> None:
        if self._api is not None:
            await asyncio.to_thread(self._api.close)
            self._api = None
