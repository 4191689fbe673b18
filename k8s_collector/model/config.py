"""Run configuration."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
DEFAULT_MAX_WORKERS = 16


def parse_resource_list(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated kind list, dropping blanks and repeats."""
    if not value:
        return ()

    seen = []
    for item in value.split(","):
        # kubectl names never contain spaces, so strip all of them
        name = "".join(item.split())
        if name and name not in seen:
            seen.append(name)
    return tuple(seen)


class RunConfig(BaseModel):
    """Immutable settings for one collection run, passed to every component."""

    namespace: str = Field(min_length=1)
    custom_resources: Tuple[str, ...] = ()
    zip_output: bool = False
    context: Optional[str] = None
    max_workers: int = Field(DEFAULT_MAX_WORKERS, ge=1)
    base_dir: Path = Path(".")
    timestamp: str = Field(default_factory=lambda: datetime.now().strftime(TIMESTAMP_FORMAT))

    model_config = ConfigDict(frozen=True)

    @field_validator("namespace")
    @classmethod
    def _strip_namespace(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("namespace must not be blank")
        return value

    @field_validator("custom_resources", mode="before")
    @classmethod
    def _split_custom_resources(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            return parse_resource_list(value)
        if isinstance(value, (list, tuple, set)):
            return parse_resource_list(",".join(value))
        return value

    @property
    def output_name(self) -> str:
        """Directory name of the output tree."""
        return f"{self.namespace}_{self.timestamp}"

    @property
    def output_dir(self) -> Path:
        """Root of the output tree."""
        return self.base_dir / self.output_name
