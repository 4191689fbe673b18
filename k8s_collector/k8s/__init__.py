"""Kubernetes interaction module."""

from .client import KubectlClient

__all__ = ["KubectlClient"]
