"""Consolidated report of error lines found in container logs."""

from typing import Dict, List

from ..model.config import RunConfig
from ..utils.logger import get_logger
from .tree import OutputTree

logger = get_logger(__name__)

ERROR_TOKEN = "error"


def error_lines(text: str) -> List[str]:
    """Lines containing the error token in any case, in original order.

    Only ``\n`` ends a line; carriage returns and other separators stay
    inside the line they belong to.
    """
    return [line for line in text.split("\n") if ERROR_TOKEN in line.lower()]


class LogErrorScanner:
    """Scans captured logs once every log fetch has finished."""

    def __init__(self, config: RunConfig, tree: OutputTree):
        self.config = config
        self.tree = tree

    def write_header(self) -> None:
        """Start ``error_summary.log`` with its preamble."""
        with open(self.tree.error_log, "w", encoding="utf-8") as f:
            f.write(
                f"Error Log Summary for Namespace: {self.config.namespace} "
                f"(Extracted on {self.config.timestamp})\n"
            )
            f.write("=" * 73 + "\n\n")

    def scan(self, containers: Dict[str, List[str]]) -> int:
        """Append a block per (pod, container) with error lines; return the block count."""
        logger.info("Extracting error logs from all containers...")

        pairs = 0
        with open(self.tree.error_log, "a", encoding="utf-8") as report:
            for pod, names in containers.items():
                for container in names:
                    matches = self._scan_log(pod, container)
                    if not matches:
                        continue

                    report.write(f"=== Error logs from pod: {pod}, container: {container} ===\n\n")
                    for line in matches:
                        report.write(f"{line}\n")
                    report.write("\n" + "-" * 48 + "\n\n")
                    pairs += 1

        logger.debug(f"Found error lines in {pairs} container logs")
        return pairs

    def _scan_log(self, pod: str, container: str) -> List[str]:
        path = self.tree.log_path(pod, container)
        if not path.is_file() or path.stat().st_size == 0:
            return []
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            return error_lines(f.read())
