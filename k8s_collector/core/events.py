"""Namespace event export."""

from concurrent.futures import Executor

from ..exceptions import FetchError
from ..k8s import KubectlClient
from ..utils.logger import get_logger
from .pool import FetchGroup
from .tree import OutputTree

logger = get_logger(__name__)

# (file name, sort key, output format)
EVENT_VIEWS = (
    ("events.txt", None, "wide"),
    ("events_by_timestamp.txt", ".lastTimestamp", "wide"),
    ("events.json", None, "json"),
)


def count_events(text: str) -> int:
    """Count table rows: non-indented lines, minus the header."""
    rows = [line for line in text.splitlines() if line and not line[0].isspace()]
    return max(len(rows) - 1, 0)


class EventsExporter:
    """Writes three views of the namespace events, unfiltered."""

    def __init__(self, client: KubectlClient, tree: OutputTree, fetch_pool: Executor):
        self.client = client
        self.tree = tree
        self.fetch_pool = fetch_pool

    def export(self) -> int:
        """Fetch all views concurrently and return the event count."""
        logger.info(f"Extracting events for namespace: {self.client.namespace}")

        group = FetchGroup(self.fetch_pool, "Events")
        for filename, sort_by, output in EVENT_VIEWS:
            group.submit("Event", filename, "get", self._write_view, filename, sort_by, output)
        group.join()

        default_view = self.tree.events_dir / EVENT_VIEWS[0][0]
        if not default_view.is_file():
            return 0
        return count_events(default_view.read_text())

    def _write_view(self, filename: str, sort_by, output: str) -> None:
        success, text = self.client.get_events(sort_by=sort_by, output=output)
        path = self.tree.events_dir / filename
        if success:
            path.write_text(text)
            return

        path.write_text("")
        raise FetchError("get events", filename, text)
