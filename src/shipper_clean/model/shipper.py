"""Shipper resource models."""

import copy
from typing import Dict, Any, Optional, List

from pydantic import BaseModel, Field

from ..errors import InvalidReleaseError

APP_LABEL = "shipper-app"
RELEASE_CLUSTERS_ANNOTATION = "shipper.booking.com/release.clusters"
RELEASE_GENERATION_ANNOTATION = "shipper.booking.com/release.generation"


def split_clusters(value: Optional[str]) -> List[str]:
    """Split a comma-joined cluster annotation, dropping empty entries."""
    if not value:
        return []
    return [cluster.strip() for cluster in value.split(",") if cluster.strip()]


class ShipperObject(BaseModel):
    """Common shape of the Shipper custom resources we read."""

    api_version: str = "shipper.booking.com/v1alpha1"
    kind: str
    metadata: Dict[str, Any]
    spec: Optional[Dict[str, Any]] = None
    status: Optional[Dict[str, Any]] = None

    @property
    def name(self) -> str:
        """Get resource name."""
        return self.metadata.get("name", "")

    @property
    def namespace(self) -> str:
        """Get resource namespace."""
        return self.metadata.get("namespace", "")

    @property
    def labels(self) -> Dict[str, str]:
        """Get resource labels."""
        return self.metadata.get("labels") or {}

    @property
    def annotations(self) -> Dict[str, str]:
        """Get resource annotations."""
        return self.metadata.get("annotations") or {}

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"

    def to_k8s(self) -> Dict[str, Any]:
        """Render back to the API object layout."""
        data = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": copy.deepcopy(self.metadata),
        }
        if self.spec is not None:
            data["spec"] = copy.deepcopy(self.spec)
        if self.status is not None:
            data["status"] = copy.deepcopy(self.status)
        return data


class Release(ShipperObject):
    """A Shipper release.

    ``selected_clusters`` is the set of clusters the release was scheduled on
    when it was read. The cluster annotation is the recorded copy of that set
    and is what gets rewritten; the two are kept apart so a rewrite on this
    object never changes what it was scheduled on.
    """

    kind: str = "Release"
    selected_clusters: List[str] = Field(default_factory=list)

    @classmethod
    def from_k8s(cls, item: Dict[str, Any]) -> "Release":
        """Build a release from a raw API object."""
        metadata = item.get("metadata") or {}
        annotations = metadata.get("annotations") or {}
        return cls(
            api_version=item.get("apiVersion", "shipper.booking.com/v1alpha1"),
            kind=item.get("kind", "Release"),
            metadata=metadata,
            spec=item.get("spec"),
            status=item.get("status"),
            selected_clusters=split_clusters(annotations.get(RELEASE_CLUSTERS_ANNOTATION)),
        )

    @property
    def app_name(self) -> str:
        """Name of the owning application, from the app label."""
        app_name = self.labels.get(APP_LABEL)
        if not app_name:
            raise InvalidReleaseError(f"release {self.key} has no {APP_LABEL!r} label")
        return app_name

    @property
    def generation(self) -> int:
        value = self.annotations.get(RELEASE_GENERATION_ANNOTATION)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise InvalidReleaseError(
                f"release {self.key} has an invalid generation annotation: {value!r}"
            )

    @property
    def recorded_clusters(self) -> str:
        """The cluster annotation exactly as stored."""
        return self.annotations.get(RELEASE_CLUSTERS_ANNOTATION, "")

    def with_clusters(self, clusters: str) -> "Release":
        """Return a copy whose cluster annotation is set to ``clusters``."""
        metadata = copy.deepcopy(self.metadata)
        annotations = dict(metadata.get("annotations") or {})
        annotations[RELEASE_CLUSTERS_ANNOTATION] = clusters
        metadata["annotations"] = annotations
        return self.model_copy(update={"metadata": metadata})


class Application(ShipperObject):
    """A Shipper application."""

    kind: str = "Application"

    @classmethod
    def from_k8s(cls, item: Dict[str, Any]) -> "Application":
        """Build an application from a raw API object."""
        return cls(
            api_version=item.get("apiVersion", "shipper.booking.com/v1alpha1"),
            kind=item.get("kind", "Application"),
            metadata=item.get("metadata") or {},
            spec=item.get("spec"),
            status=item.get("status"),
        )


class OutputRelease(BaseModel):
    """A counted release, as printed in structured output."""

    namespace: str
    name: str

    @classmethod
    def of(cls, release: Release) -> "OutputRelease":
        return cls(namespace=release.namespace, name=release.name)
