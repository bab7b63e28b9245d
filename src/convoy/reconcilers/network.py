"""Network reconciler."""

import logging

from convoy.models.state import DesiredState
from convoy.reconcilers.base import BaseReconciler
from convoy.runtime.base import RuntimeClient, RuntimeClientError


logger = logging.getLogger(__name__)


class NetworkReconciler(BaseReconciler):
    """Creates declared networks that do not exist yet.

    Networks are matched by name only. With ``short_circuit`` enabled the
    first declared network found on the runtime ends the reconciler for the
    whole pass, which is how earlier agent versions behaved.
    """

    kind = "network"

    def __init__(self, client: RuntimeClient, short_circuit: bool = False):
        super().__init__(client)
        self.short_circuit = short_circuit

    async def reconcile(self, desired: DesiredState) -> None:
        try:
            existing = await self.client.list_networks()
        except RuntimeClientError as e:
            logger.warning(f"Network list failed: {e}")
            raise
        existing_names = {net.name for net in existing}

        for name, spec in desired.networks.items():
            if name in existing_names:
                logger.info(f"Network {name} already exists, nothing to do")
                if self.short_circuit:
                    return
                continue

            logger.info(f"Creating network {name} ({spec.driver})")
            try:
                network_id, warning = await self.client.create_network(name, spec)
            except RuntimeClientError as e:
                logger.warning(f"Network create for {name} failed: {e}")
                raise

            if warning:
                logger.warning(f"Network {name} created as {network_id} with warning: {warning}")
            else:
                logger.info(f"Network {name} created as {network_id}")
