"""Summary report generator."""

from typing import List

from ..model.report import CollectionSummary, KindResult
from ..utils.logger import get_logger
from .tree import OutputTree

logger = get_logger(__name__)


def _count_line(result: KindResult) -> str:
    line = f"{result.kind}: {result.count}"
    if not result.found:
        line += " (not found in cluster)"
    elif result.failed:
        line += f" ({result.failed} failed)"
    return line


class SummaryReporter:
    """Aggregates the counters of a finished run into ``summary.txt``."""

    def __init__(self, tree: OutputTree):
        self.tree = tree

    def generate_report(self, summary: CollectionSummary) -> str:
        """Format the summary as human-readable text."""
        lines: List[str] = []
        lines.append("Summary")
        lines.append("=" * 40)
        lines.append(f"Namespace: {summary.namespace}")
        lines.append(f"Timestamp: {summary.timestamp}")
        lines.append("")

        lines.append("Resources collected:")
        lines.append("-" * 19)
        lines.append(_count_line(summary.pods))
        for result in summary.builtin:
            lines.append(_count_line(result))
        lines.append(f"Events: {summary.events}")

        if summary.custom:
            lines.append("")
            lines.append("Custom Resources:")
            lines.append("-" * 16)
            for result in summary.custom:
                lines.append(_count_line(result))

        lines.append("")
        lines.append("Error logs:")
        lines.append("-" * 11)
        lines.append(f"Container logs with errors: {summary.error_log_pairs}")
        lines.append(f"See {self.tree.relative(self.tree.error_log)} for details")

        events = self.tree.events_dir
        lines.append("")
        lines.append("Events:")
        lines.append("-" * 7)
        lines.append(f"Events by resource: {self.tree.relative(events / 'events.txt')}")
        lines.append(
            f"Events by timestamp: {self.tree.relative(events / 'events_by_timestamp.txt')}"
        )
        lines.append(f"Events in JSON format: {self.tree.relative(events / 'events.json')}")

        return "\n".join(lines) + "\n"

    def write(self, summary: CollectionSummary) -> str:
        """Write ``summary.txt`` and return its content."""
        logger.info("Generating summary...")
        content = self.generate_report(summary)
        self.tree.summary.write_text(content)
        return content
