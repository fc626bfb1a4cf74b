"""Test configuration and fixtures."""

import io
from typing import Dict, List, Optional

import pytest
from rich.console import Console

from shipper_clean.errors import NotFoundError, StoreError
from shipper_clean.model.config import RunConfig
from shipper_clean.model.shipper import (
    APP_LABEL,
    RELEASE_CLUSTERS_ANNOTATION,
    RELEASE_GENERATION_ANNOTATION,
    Application,
    Release,
)


def make_release(
    name: str,
    namespace: str = "team-a",
    app: Optional[str] = "app",
    generation: Optional[int] = 0,
    clusters: Optional[str] = "kube-1",
    selected: Optional[List[str]] = None,
) -> Release:
    """Build a release the way it comes back from the API."""
    labels = {APP_LABEL: app} if app else {}
    annotations = {}
    if generation is not None:
        annotations[RELEASE_GENERATION_ANNOTATION] = str(generation)
    if clusters is not None:
        annotations[RELEASE_CLUSTERS_ANNOTATION] = clusters

    release = Release.from_k8s(
        {
            "apiVersion": "shipper.booking.com/v1alpha1",
            "kind": "Release",
            "metadata": {
                "name": name,
                "namespace": namespace,
                "labels": labels,
                "annotations": annotations,
                "resourceVersion": "1",
            },
            "spec": {"environment": {"chart": {"name": "app"}}},
        }
    )
    if selected is not None:
        release = release.model_copy(update={"selected_clusters": selected})
    return release


def make_application(name: str = "app", namespace: str = "team-a") -> Application:
    return Application.from_k8s(
        {
            "apiVersion": "shipper.booking.com/v1alpha1",
            "kind": "Application",
            "metadata": {"name": name, "namespace": namespace},
        }
    )


class FakeStore:
    """In-memory stand-in for ShipperStore that records writes."""

    def __init__(self):
        self.namespaces: List[str] = []
        self.releases: Dict[str, List[Release]] = {}
        self.applications: Dict[str, List[Application]] = {}
        self.updated: List[Release] = []
        self.deleted: List[str] = []
        self.fail_list = set()
        self.fail_write = set()

    def _ensure_namespace(self, namespace: str) -> None:
        if namespace not in self.namespaces:
            self.namespaces.append(namespace)

    def add_release(self, release: Release) -> Release:
        self._ensure_namespace(release.namespace)
        self.releases.setdefault(release.namespace, []).append(release)
        return release

    def add_application(self, application: Application) -> Application:
        self._ensure_namespace(application.namespace)
        self.applications.setdefault(application.namespace, []).append(application)
        return application

    def list_namespaces(self) -> List[str]:
        return list(self.namespaces)

    def list_releases(self, namespace: str, selector: Optional[str] = None) -> List[Release]:
        if namespace in self.fail_list:
            raise StoreError(f"cannot list releases in {namespace}")
        releases = list(self.releases.get(namespace, []))
        if selector:
            key, value = selector.split("=")
            releases = [r for r in releases if r.labels.get(key) == value]
        return releases

    def get_application(self, namespace: str, name: str) -> Application:
        for application in self.applications.get(namespace, []):
            if application.name == name:
                return application
        raise NotFoundError(f'applications.shipper.booking.com "{name}" not found')

    def list_applications(self, namespace: str) -> List[Application]:
        if namespace in self.fail_list:
            raise StoreError(f"cannot list applications in {namespace}")
        return list(self.applications.get(namespace, []))

    def update_release(self, release: Release) -> None:
        if release.key in self.fail_write:
            raise StoreError(f"conflict updating {release.key}")
        self.updated.append(release)
        # Stored copy is what a fresh read would return
        stored = Release.from_k8s(release.to_k8s())
        self.releases[release.namespace] = [
            stored if r.name == release.name else r for r in self.releases[release.namespace]
        ]

    def delete_release(self, namespace: str, name: str) -> None:
        key = f"{namespace}/{name}"
        if key in self.fail_write:
            raise StoreError(f"cannot delete {key}")
        self.deleted.append(key)
        self.releases[namespace] = [r for r in self.releases[namespace] if r.name != name]


@pytest.fixture
def store():
    """Empty fake store."""
    return FakeStore()


@pytest.fixture
def config():
    """Run configuration with kube-2 and kube-3 decommissioned."""
    return RunConfig.build(["kube-2,kube-3"])


@pytest.fixture
def dry_run_config():
    return RunConfig.build(["kube-2", "kube-3"], dry_run=True)


@pytest.fixture
def output():
    """Console writing to a buffer, wide enough that nothing wraps."""
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer
