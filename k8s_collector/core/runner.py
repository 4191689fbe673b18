"""Orchestration of one namespace collection run."""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

from ..k8s import KubectlClient
from ..model.config import RunConfig
from ..model.kinds import BUILTIN_KINDS
from ..model.report import CollectionSummary, KindResult
from ..utils.logger import get_logger
from .archiver import ZipArchiver
from .collector import PodCollector, ResourceCollector
from .events import EventsExporter
from .reporter import SummaryReporter
from .scanner import LogErrorScanner
from .tree import OutputTree

logger = get_logger(__name__)


class NamespaceCollection:
    """Runs the collection phases with a join barrier after each.

    Pods (and their logs) first, then the built-in kinds alongside the
    events export, then custom kinds. Every kubectl fetch shares one pool
    bounded by ``config.max_workers``; kind-level jobs run on a separate
    coordinator pool so that waiting coordinators never hold fetch workers.
    """

    def __init__(self, config: RunConfig, client: KubectlClient):
        self.config = config
        self.client = client
        self.tree = OutputTree(config.output_dir)

    def run(self) -> CollectionSummary:
        """Collect the namespace and write the summary report."""
        logger.info(f"=== Starting extraction for namespace: {self.config.namespace} ===")
        logger.info(f"Creating output directory: {self.tree.root}")
        self.tree.create()

        scanner = LogErrorScanner(self.config, self.tree)
        scanner.write_header()

        with ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix="fetch"
        ) as fetch_pool:
            pods = PodCollector(self.client, self.tree, fetch_pool).collect_pods()
            error_log_pairs = scanner.scan(pods.containers)

            collector = ResourceCollector(self.client, self.tree, fetch_pool)
            events = EventsExporter(self.client, self.tree, fetch_pool)
            builtin, event_count = self._collect_builtin(collector, events)
            custom = self._collect_custom(collector)

        summary = CollectionSummary(
            namespace=self.config.namespace,
            timestamp=self.config.timestamp,
            output_dir=self.tree.root,
            pods=pods.pods,
            builtin=builtin,
            custom=custom,
            error_log_pairs=error_log_pairs,
            events=event_count,
        )
        SummaryReporter(self.tree).write(summary)

        if self.config.zip_output:
            archive, summary_copy = ZipArchiver(self.config).archive(self.tree)
            summary = summary.model_copy(update={"archive": archive, "summary_copy": summary_copy})

        logger.info("=== Extraction completed successfully ===")
        return summary

    def _collect_builtin(self, collector: ResourceCollector, events: EventsExporter):
        jobs: Dict[str, Callable[[], Any]] = {
            kind.title: (lambda kind=kind: collector.collect(kind)) for kind in BUILTIN_KINDS
        }
        jobs["Events"] = events.export
        results = self._run_coordinated(jobs)

        builtin = [
            results.get(kind.title) or KindResult(kind=kind.title) for kind in BUILTIN_KINDS
        ]
        return builtin, results.get("Events") or 0

    def _collect_custom(self, collector: ResourceCollector) -> List[KindResult]:
        if not self.config.custom_resources:
            return []

        logger.info("Processing custom resources...")
        api_resources = self.client.get_api_resources()
        jobs: Dict[str, Callable[[], Any]] = {
            name: (lambda name=name: collector.collect_custom(name, api_resources))
            for name in self.config.custom_resources
        }
        results = self._run_coordinated(jobs)

        return [
            results.get(name) or KindResult(kind=name) for name in self.config.custom_resources
        ]

    def _run_coordinated(self, jobs: Dict[str, Callable[[], Any]]) -> Dict[str, Optional[Any]]:
        """Run kind-level jobs concurrently and wait for all of them.

        A job that raises is logged and reported as ``None``.
        """
        results: Dict[str, Optional[Any]] = {}
        with ThreadPoolExecutor(
            max_workers=len(jobs), thread_name_prefix="kind"
        ) as coordinator:
            futures: Dict[str, Future] = {
                label: coordinator.submit(job) for label, job in jobs.items()
            }
            for label, future in futures.items():
                try:
                    results[label] = future.result()
                except Exception as e:
                    logger.error(f"Error collecting {label}: {e}")
                    results[label] = None
        return results
