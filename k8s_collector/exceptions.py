"""Exceptions raised by the collector."""


class CollectorError(Exception):
    """Base class for collector failures."""


class KubectlNotFoundError(CollectorError):
    """The kubectl binary could not be executed."""


class FetchError(CollectorError):
    """A single kubectl fetch for one resource instance failed."""

    def __init__(self, operation: str, target: str, detail: str = ""):
        self.operation = operation
        self.target = target
        self.detail = detail.strip()
        message = f"{operation} {target} failed"
        if self.detail:
            message += f": {self.detail}"
        super().__init__(message)
