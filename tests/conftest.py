"""Test configuration and fixtures."""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Set, Tuple

import pytest
import yaml

from k8s_collector.core.tree import OutputTree
from k8s_collector.k8s.client import KubectlClient, parse_api_resources
from k8s_collector.model.config import RunConfig

SAMPLE_EVENTS = (
    "LAST SEEN   TYPE      REASON      OBJECT      MESSAGE\n"
    "2m          Normal    Scheduled   pod/web-0   Successfully assigned demo/web-0\n"
    "1m          Warning   BackOff     pod/web-0   Back-off restarting failed container\n"
)

SAMPLE_API_RESOURCES = (
    "NAME              SHORTNAMES   APIVERSION                 NAMESPACED   KIND\n"
    "pods              po           v1                         true         Pod\n"
    "deployments       deploy       apps/v1                    true         Deployment\n"
    "certificates      cert,certs   cert-manager.io/v1         true         Certificate\n"
    "issuers                        cert-manager.io/v1         true         Issuer\n"
)


class FakeKubectl:
    """In-memory stand-in for KubectlClient with canned cluster state."""

    has_resource_kind = staticmethod(KubectlClient.has_resource_kind)

    def __init__(
        self,
        namespace: str = "demo",
        pods: Optional[Dict[str, List[str]]] = None,
        logs: Optional[Dict[Tuple[str, str], str]] = None,
        resources: Optional[Dict[str, List[str]]] = None,
        events: str = SAMPLE_EVENTS,
        api_resources: str = SAMPLE_API_RESOURCES,
        failures: Optional[Set[Tuple[str, str]]] = None,
    ):
        self.namespace = namespace
        self.context = None
        self.pods = pods or {}
        self.log_streams = logs or {}
        self.resources = dict(resources or {})
        self.resources["pods"] = list(self.pods)
        self.events = events
        self.api_resources = api_resources
        # (operation, target) pairs that fail, e.g. ("describe", "deployment/web")
        self.failures = failures or set()
        self.calls: List[Tuple[str, ...]] = []
        self._lock = threading.Lock()

    def _record(self, *call: str) -> None:
        with self._lock:
            self.calls.append(call)

    def list_names(self, resource_type: str) -> List[str]:
        self._record("list", resource_type)
        if ("list", resource_type) in self.failures:
            return []
        return list(self.resources.get(resource_type, []))

    def get_listing(self, resource_type: str) -> Tuple[bool, str]:
        self._record("listing", resource_type)
        if ("listing", resource_type) in self.failures:
            return False, "error: the server doesn't have a resource type"
        names = self.resources.get(resource_type, [])
        if not names:
            return True, ""
        return True, "NAME   AGE\n" + "".join(f"{name}   1d\n" for name in names)

    def describe(self, resource_type: str, name: str) -> Tuple[bool, str]:
        self._record("describe", resource_type, name)
        if ("describe", f"{resource_type}/{name}") in self.failures:
            return False, f'Error from server (NotFound): "{name}" not found'
        return True, f"Name:         {name}\nNamespace:    {self.namespace}\n"

    def get_yaml(self, resource_type: str, name: str) -> Tuple[bool, str]:
        self._record("get", resource_type, name)
        if ("get", f"{resource_type}/{name}") in self.failures:
            return False, f'Error from server (NotFound): "{name}" not found'
        manifest = {
            "apiVersion": "v1",
            "kind": resource_type,
            "metadata": {"name": name, "namespace": self.namespace},
        }
        if resource_type == "pod":
            manifest["spec"] = {"containers": [{"name": c} for c in self.pods.get(name, [])]}
        return True, yaml.safe_dump(manifest, sort_keys=False)

    def logs(self, pod: str, container: str) -> Tuple[bool, str]:
        self._record("logs", pod, container)
        if ("logs", f"{pod}/{container}") in self.failures:
            return False, "container is waiting to start"
        return True, self.log_streams.get((pod, container), "")

    def get_events(self, sort_by: Optional[str] = None, output: str = "wide") -> Tuple[bool, str]:
        self._record("events", sort_by or "", output)
        if output == "json":
            return True, '{"apiVersion": "v1", "items": [], "kind": "List"}\n'
        return True, self.events

    def get_api_resources(self):
        self._record("api-resources")
        return parse_api_resources(self.api_resources)


@pytest.fixture
def fake_client():
    """Factory for FakeKubectl instances."""
    return FakeKubectl


@pytest.fixture
def run_config(tmp_path):
    """Run configuration rooted in a temporary directory."""
    return RunConfig(namespace="demo", base_dir=tmp_path, timestamp="20240101_120000")


@pytest.fixture
def tree(run_config):
    """Created output tree for ``run_config``."""
    return OutputTree(run_config.output_dir).create()


@pytest.fixture
def fetch_pool():
    """Bounded fetch executor."""
    with ThreadPoolExecutor(max_workers=4) as executor:
        yield executor
