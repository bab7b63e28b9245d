"""Resource reconcilers for convoy."""

from convoy.reconcilers.base import BaseReconciler
from convoy.reconcilers.container import ContainerCreationReconciler, ContainerRemovalReconciler
from convoy.reconcilers.network import NetworkReconciler
from convoy.reconcilers.volume import VolumeReconciler

__all__ = [
    "BaseReconciler",
    "ContainerCreationReconciler",
    "ContainerRemovalReconciler",
    "NetworkReconciler",
    "VolumeReconciler",
]
