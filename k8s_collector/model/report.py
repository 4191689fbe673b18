"""Collection result and summary models."""

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class FetchFailure(BaseModel):
    """One fetch that raised inside a task group."""

    kind: str
    instance: str
    operation: str
    error: str


class KindResult(BaseModel):
    """Counts for one collected resource kind."""

    kind: str
    count: int = 0
    failed: int = 0
    found: bool = True

    @classmethod
    def from_failures(
        cls, kind: str, names: List[str], failures: List[FetchFailure]
    ) -> "KindResult":
        """Count listed instances and the distinct ones with a failed fetch."""
        failed = {f.instance for f in failures if f.instance in names}
        return cls(kind=kind, count=len(names), failed=len(failed))


class PodCollectionResult(BaseModel):
    """Pod counts plus the containers read from each pod's spec."""

    pods: KindResult
    containers: Dict[str, List[str]] = Field(default_factory=dict)


class CollectionSummary(BaseModel):
    """Everything the summary report aggregates."""

    namespace: str
    timestamp: str
    output_dir: Path
    pods: KindResult
    builtin: List[KindResult] = Field(default_factory=list)
    custom: List[KindResult] = Field(default_factory=list)
    error_log_pairs: int = 0
    events: int = 0
    archive: Optional[Path] = None
    summary_copy: Optional[Path] = None
