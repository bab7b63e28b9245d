"""Base reconciler interface."""

from abc import ABC, abstractmethod

from convoy.models.state import DesiredState
from convoy.runtime.base import RuntimeClient


class BaseReconciler(ABC):
    """Drives one resource kind toward the desired state.

    A reconciler observes the runtime afresh on every call and keeps no
    state between passes.
    """

    kind: str = "resource"

    def __init__(self, client: RuntimeClient):
        self.client = client

    @abstractmethod
    async def reconcile(self, desired: DesiredState) -> None:
        """Converge the runtime toward desired for this resource kind."""
        pass
