"""Volume reconciler."""

import logging

from convoy.models.state import DesiredState
from convoy.reconcilers.base import BaseReconciler
from convoy.runtime.base import RuntimeClientError


logger = logging.getLogger(__name__)


class VolumeReconciler(BaseReconciler):
    """Creates every declared volume on each pass.

    Existing volumes are not inspected first; creating a volume whose name
    already exists is a no-op on Docker. The first failure aborts the rest
    of the volumes without rolling back those already created.
    """

    kind = "volume"

    async def reconcile(self, desired: DesiredState) -> None:
        for spec in desired.volumes:
            try:
                await self.client.create_volume(spec)
            except RuntimeClientError as e:
                logger.warning(f"Volume create for {spec.name} failed: {e}")
                raise
            logger.info(f"Volume {spec.name} created ({spec.driver})")
