"""Diagnostic snapshots of a Kubernetes namespace."""

__version__ = "0.1.0"
