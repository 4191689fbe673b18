"""Core collection logic."""

from .archiver import ZipArchiver
from .collector import PodCollector, ResourceCollector
from .events import EventsExporter
from .pool import FetchGroup
from .reporter import SummaryReporter
from .runner import NamespaceCollection
from .scanner import LogErrorScanner
from .tree import OutputTree

__all__ = [
    "ZipArchiver",
    "PodCollector",
    "ResourceCollector",
    "EventsExporter",
    "FetchGroup",
    "SummaryReporter",
    "NamespaceCollection",
    "LogErrorScanner",
    "OutputTree",
]
