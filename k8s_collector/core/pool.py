"""Task groups over a shared, bounded fetch executor."""

import threading
from concurrent.futures import Executor, Future, as_completed
from typing import Any, Callable, Dict, List, Set

from ..model.report import FetchFailure
from ..utils.logger import get_logger

logger = get_logger(__name__)


class FetchGroup:
    """Launches fetches on an executor and joins them with per-task error capture.

    Tasks may submit further work to the same group while running; ``join``
    keeps waiting until no submitted future is left unfinished. A task that
    raises is recorded as a ``FetchFailure`` and never stops its siblings.
    """

    def __init__(self, executor: Executor, name: str):
        self.executor = executor
        self.name = name
        self._futures: Dict[Future, FetchFailure] = {}
        self._lock = threading.Lock()

    def submit(
        self, kind: str, instance: str, operation: str, fn: Callable[..., Any], *args: Any
    ) -> Future:
        """Start ``fn(*args)`` on the executor without waiting for it."""
        label = FetchFailure(kind=kind, instance=instance, operation=operation, error="")
        with self._lock:
            future = self.executor.submit(fn, *args)
            self._futures[future] = label
        return future

    def __len__(self) -> int:
        with self._lock:
            return len(self._futures)

    def join(self) -> List[FetchFailure]:
        """Wait for every submitted task, including ones submitted meanwhile."""
        failures: List[FetchFailure] = []
        done: Set[Future] = set()

        while True:
            with self._lock:
                pending = [f for f in self._futures if f not in done]
            if not pending:
                break

            for future in as_completed(pending):
                done.add(future)
                try:
                    future.result()
                except Exception as e:
                    with self._lock:
                        label = self._futures[future]
                    failure = label.model_copy(update={"error": str(e)})
                    logger.warning(
                        f"{self.name}: {failure.operation} {failure.kind}/{failure.instance} "
                        f"failed: {failure.error}"
                    )
                    failures.append(failure)

        logger.debug(f"{self.name}: joined {len(done)} tasks, {len(failures)} failed")
        return failures
