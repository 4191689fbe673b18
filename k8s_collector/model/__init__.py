"""Data models for k8s-collector."""

from .config import RunConfig, parse_resource_list
from .kinds import BUILTIN_KINDS, POD, ResourceKind
from .report import CollectionSummary, FetchFailure, KindResult, PodCollectionResult

__all__ = [
    "RunConfig",
    "parse_resource_list",
    "BUILTIN_KINDS",
    "POD",
    "ResourceKind",
    "CollectionSummary",
    "FetchFailure",
    "KindResult",
    "PodCollectionResult",
]
