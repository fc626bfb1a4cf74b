"""Access to Shipper objects on the management cluster."""

import json
from typing import List, Optional

from ..model.shipper import Application, Release
from ..utils.logger import get_logger
from .client import K8sClient

logger = get_logger(__name__)

RELEASES = "releases.shipper.booking.com"
APPLICATIONS = "applications.shipper.booking.com"


class ShipperStore:
    """Lists, reads and writes namespaces, releases and applications.

    Every method raises StoreError (or NotFoundError) when kubectl fails.
    """

    def __init__(self, client: K8sClient):
        self.client = client

    def list_namespaces(self) -> List[str]:
        data = self.client.get_json("namespaces")
        return [item.get("metadata", {}).get("name", "") for item in data.get("items", [])]

    def list_releases(self, namespace: str, selector: Optional[str] = None) -> List[Release]:
        """List releases in a namespace, optionally by label selector."""
        data = self.client.get_json(RELEASES, namespace=namespace, selector=selector)
        releases = [Release.from_k8s(item) for item in data.get("items", [])]
        logger.debug(f"Found {len(releases)} releases in {namespace}")
        return releases

    def get_application(self, namespace: str, name: str) -> Application:
        data = self.client.get_json(APPLICATIONS, name=name, namespace=namespace)
        return Application.from_k8s(data)

    def list_applications(self, namespace: str) -> List[Application]:
        data = self.client.get_json(APPLICATIONS, namespace=namespace)
        return [Application.from_k8s(item) for item in data.get("items", [])]

    def update_release(self, release: Release) -> None:
        """Replace the release object.

        The stored resourceVersion is sent along, so a release modified since
        it was listed fails with a conflict instead of being overwritten.
        """
        self.client.run(
            ["replace", "-n", release.namespace, "-f", "-"],
            stdin=json.dumps(release.to_k8s()),
        )

    def delete_release(self, namespace: str, name: str) -> None:
        self.client.run(["delete", RELEASES, name, "-n", namespace])
