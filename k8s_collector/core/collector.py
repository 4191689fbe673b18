"""Per-kind collection of listings, descriptions, YAML and pod logs."""

from concurrent.futures import Executor
from typing import Any, Dict, Iterable, List

import yaml

from ..exceptions import FetchError
from ..k8s import KubectlClient
from ..model.kinds import POD, ResourceKind
from ..model.report import KindResult, PodCollectionResult
from ..utils.logger import get_logger
from .pool import FetchGroup
from .tree import OutputTree

logger = get_logger(__name__)


class ResourceCollector:
    """Collects every instance of a resource kind into the output tree.

    Listing happens in the calling thread; the describe and YAML fetches for
    each instance are launched on the shared fetch executor and joined before
    returning.
    """

    def __init__(self, client: KubectlClient, tree: OutputTree, fetch_pool: Executor):
        self.client = client
        self.tree = tree
        self.fetch_pool = fetch_pool

    def collect(self, kind: ResourceKind) -> KindResult:
        """Collect a kind; an empty or failed listing yields a zero count."""
        logger.info(f"Extracting {kind.name} information...")

        self._write_listing(kind)
        names = self.client.list_names(kind.plural)

        group = FetchGroup(self.fetch_pool, kind.name)
        for name in names:
            logger.info(f"Processing {kind.name}: {name}")
            self._submit_instance(group, kind, name)

        result = KindResult.from_failures(kind.title, names, group.join())
        logger.debug(f"Collected {result.count} {kind.title} ({result.failed} failed)")
        return result

    def collect_custom(self, name: str, api_resources: Iterable[Dict[str, Any]]) -> KindResult:
        """Collect a caller-supplied kind after checking the cluster knows it."""
        logger.info(f"Extracting custom resource: {name}...")

        if not self.client.has_resource_kind(name, api_resources):
            logger.warning(f"Custom resource '{name}' not found in the cluster. Skipping.")
            return KindResult(kind=name, count=0, found=False)

        result = self.collect(ResourceKind.custom_kind(name))
        if not result.count:
            logger.info(
                f"No resources of type '{name}' found in namespace {self.client.namespace}"
            )
        return result

    def _write_listing(self, kind: ResourceKind) -> None:
        path = self.tree.listing_path(kind)
        path.parent.mkdir(parents=True, exist_ok=True)

        success, output = self.client.get_listing(kind.plural)
        if success and output.strip():
            path.write_text(output)
        else:
            path.write_text(f"No {kind.title} found\n")

    def _submit_instance(self, group: FetchGroup, kind: ResourceKind, name: str) -> None:
        group.submit(kind.name, name, "describe", self._describe, kind, name)
        group.submit(kind.name, name, "get", self._fetch_yaml, kind, name)

    def _describe(self, kind: ResourceKind, name: str) -> None:
        success, output = self.client.describe(kind.singular, name)
        path = self.tree.describe_path(kind, name)
        if success:
            path.write_text(output)
            return

        path.write_text(f"Failed to describe {kind.singular} {name}: {output.strip()}\n")
        raise FetchError("describe", f"{kind.singular}/{name}", output)

    def _fetch_yaml(self, kind: ResourceKind, name: str) -> str:
        success, output = self.client.get_yaml(kind.singular, name)
        path = self.tree.yaml_path(kind, name)
        if success:
            path.write_text(output)
            return output

        # Keeps a get/ entry for every described instance
        path.write_text(f"# Failed to get {kind.singular} {name}: {output.strip()}\n")
        raise FetchError("get", f"{kind.singular}/{name}", output)


class PodCollector(ResourceCollector):
    """Collects pods and the log stream of every container they run."""

    def collect_pods(self) -> PodCollectionResult:
        """Fan out all pod fetches, then join once.

        Each pod's YAML fetch reads the container names from the pod spec and
        launches the log fetches into the same group, so the join covers them.
        """
        logger.info("Extracting Pod information...")

        self._write_listing(POD)
        pods = self.client.list_names(POD.plural)

        containers: Dict[str, List[str]] = {pod: [] for pod in pods}
        group = FetchGroup(self.fetch_pool, POD.name)

        for pod in pods:
            logger.info(f"Processing pod: {pod}")
            self.tree.log_dir(pod).mkdir(parents=True, exist_ok=True)
            group.submit(POD.name, pod, "describe", self._describe, POD, pod)
            group.submit(POD.name, pod, "get", self._fetch_pod, group, pod, containers)

        failures = group.join()
        return PodCollectionResult(
            pods=KindResult.from_failures(POD.title, pods, failures),
            containers=containers,
        )

    def _fetch_pod(self, group: FetchGroup, pod: str, containers: Dict[str, List[str]]) -> None:
        manifest = self._fetch_yaml(POD, pod)
        names = container_names(manifest)
        # Each pod owns its own list, so no other task writes here
        containers[pod].extend(names)

        for container in names:
            logger.info(f"  Extracting logs for container: {container}")
            group.submit(POD.name, pod, f"logs/{container}", self._fetch_logs, pod, container)

    def _fetch_logs(self, pod: str, container: str) -> None:
        success, output = self.client.logs(pod, container)
        path = self.tree.log_path(pod, container)
        if success:
            path.write_text(output, encoding="utf-8")
            return

        # An empty log is skipped by the error scanner
        path.write_text("")
        raise FetchError("logs", f"{pod}/{container}", output)


def container_names(manifest: str) -> List[str]:
    """Read ``spec.containers[*].name`` from a pod's YAML."""
    try:
        data = yaml.safe_load(manifest) or {}
    except yaml.YAMLError as e:
        raise FetchError("parse", "pod spec", str(e))

    if not isinstance(data, dict):
        return []
    spec = data.get("spec") or {}
    return [c["name"] for c in spec.get("containers") or [] if c.get("name")]
