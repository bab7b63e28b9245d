"""State reconciliation engine."""

import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from convoy.models.config import AgentConfig
from convoy.models.state import DesiredState
from convoy.reconcilers import (
    BaseReconciler,
    ContainerCreationReconciler,
    ContainerRemovalReconciler,
    NetworkReconciler,
    VolumeReconciler,
)
from convoy.runtime.base import RuntimeClient


logger = logging.getLogger(__name__)


class ReconcileEngine:
    """Runs the reconcilers in order against one runtime client."""

    def __init__(self, client: RuntimeClient, config: Optional[AgentConfig] = None):
        """Initialize reconcile engine."""
        config = config or AgentConfig()
        self.client = client
        self.volumes = VolumeReconciler(client)
        self.networks = NetworkReconciler(
            client, short_circuit=config.legacy_network_short_circuit
        )
        self.removal = ContainerRemovalReconciler(client, stop_timeout=config.stop_timeout)
        self.creation = ContainerCreationReconciler(client, pull_images=config.pull_images)
        self.last_reconciliation: Optional[datetime] = None
        self._reconciliation_lock = asyncio.Lock()

    def reconcilers(self, remove_existing: bool = True) -> List[BaseReconciler]:
        """Reconcilers of one pass, in execution order."""
        ordered: List[BaseReconciler] = [self.volumes, self.networks]
        if remove_existing:
            ordered.append(self.removal)
        ordered.append(self.creation)
        return ordered

    async def reconcile(self, desired: DesiredState, remove_existing: bool = True):
        """Perform one reconciliation pass.

        The first reconciler error ends the pass and is re-raised; work
        already applied is kept and converged by the next pass.
        """
        async with self._reconciliation_lock:
            start_time = datetime.now()
            logger.info(f"Starting reconciliation of {desired.summary()}")

            for reconciler in self.reconcilers(remove_existing):
                logger.debug(f"Running {reconciler.kind} reconciler")
                await reconciler.reconcile(desired)

            self.last_reconciliation = datetime.now()
            duration = (self.last_reconciliation - start_time).total_seconds()
            logger.info(f"Reconciliation completed in {duration:.2f}s")
