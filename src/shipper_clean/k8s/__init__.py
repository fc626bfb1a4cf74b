"""Kubernetes interaction module."""

from .client import K8sClient
from .store import ShipperStore

__all__ = ["K8sClient", "ShipperStore"]
