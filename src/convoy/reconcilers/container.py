"""Container reconcilers."""

import asyncio
import logging
from typing import Set

from convoy.models.container import ContainerSpec, to_api
from convoy.models.state import DesiredState
from convoy.reconcilers.base import BaseReconciler
from convoy.runtime.base import RuntimeClient, RuntimeClientError
from convoy.runtime.progress import consume_pull_stream


logger = logging.getLogger(__name__)


class ContainerRemovalReconciler(BaseReconciler):
    """Stops and removes existing containers that are declared by name.

    Failures on one container are logged and the next container is tried;
    only the initial listing can abort the reconciler.
    """

    kind = "container-removal"

    def __init__(self, client: RuntimeClient, stop_timeout: int = 30):
        super().__init__(client)
        self.stop_timeout = stop_timeout

    async def reconcile(self, desired: DesiredState) -> None:
        try:
            existing = await self.client.list_containers(include_stopped=True)
        except RuntimeClientError as e:
            logger.error(f"Container list for removal failed: {e}")
            raise

        for container in existing:
            name = container.primary_name
            if name is None:
                logger.debug(f"Ignoring container {container.id} without a name")
                continue
            if name not in desired.containers:
                continue

            logger.info(f"Found {name} in state {container.state}")

            if container.is_running:
                try:
                    await self.client.stop_container(container.id, timeout=self.stop_timeout)
                except RuntimeClientError as e:
                    logger.error(f"Container stop for {name} with id {container.id} failed: {e}")
                    continue
                logger.info(f"Stopped container {name}")

            try:
                await self.client.remove_container(container.id, force=True)
            except RuntimeClientError as e:
                logger.error(f"Container remove for {name} with id {container.id} failed: {e}")
                continue
            logger.info(f"Removed container {name}")


class ContainerCreationReconciler(BaseReconciler):
    """Creates and starts declared containers that do not exist yet.

    A container whose name is already taken is left alone, whatever its
    configuration or state.
    """

    kind = "container-creation"

    def __init__(self, client: RuntimeClient, pull_images: bool = True):
        super().__init__(client)
        self.pull_images = pull_images

    async def reconcile(self, desired: DesiredState) -> None:
        try:
            existing = await self.client.list_containers(include_stopped=True)
        except RuntimeClientError as e:
            logger.error(f"Container list failed: {e}")
            raise

        existing_names: Set[str] = set()
        for container in existing:
            logger.info(f"Found {container.state} container with names {container.names}")
            existing_names.update(container.display_names())

        for name, spec in desired.containers.items():
            if name in existing_names:
                logger.warning(f"Container {name} already exists, nothing to do")
                continue
            await self._create_and_start(spec)

    async def _create_and_start(self, spec: ContainerSpec) -> None:
        if self.pull_images:
            await self._pull(spec.image)

        logger.info(f"Creating container {spec.name} from {spec.image} image")
        try:
            container_id, warnings = await self.client.create_container(
                to_api(spec.config),
                to_api(spec.host_config),
                to_api(spec.networking_config),
                spec.name,
            )
        except RuntimeClientError as e:
            logger.warning(f"Create container for {spec.name} failed: {e}")
            raise

        if warnings:
            logger.warning(f"Created container {spec.name} as {container_id} with warnings {warnings}")
        else:
            logger.info(f"Created container {spec.name} as {container_id}")

        logger.info(f"Starting container {spec.name}")
        try:
            await self.client.start_container(container_id)
        except RuntimeClientError as e:
            logger.warning(f"Container start for {spec.name} failed: {e}")
            raise

    async def _pull(self, image_ref: str) -> None:
        logger.info(f"Pulling image {image_ref}")
        try:
            stream = await self.client.pull_image(image_ref)
            records = await asyncio.to_thread(consume_pull_stream, image_ref, stream)
        except RuntimeClientError as e:
            logger.warning(f"Image pull for {image_ref} failed: {e}")
            raise
        logger.debug(f"Image pull for {image_ref} finished after {records} status records")
