"""Resource kinds collected from a namespace."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict


class ResourceKind(BaseModel):
    """A resource kind with the singular and plural forms kubectl accepts."""

    name: str
    singular: str
    plural: str
    custom: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def builtin(cls, name: str) -> "ResourceKind":
        """Build a core kind from its CamelCase name."""
        singular = name.lower()
        return cls(name=name, singular=singular, plural=f"{singular}s")

    @classmethod
    def custom_kind(cls, name: str) -> "ResourceKind":
        """Build a caller-supplied kind; the given name is used for both forms."""
        return cls(name=name, singular=name, plural=name, custom=True)

    @property
    def title(self) -> str:
        """Plural label used in listings and reports, e.g. ``StatefulSets``."""
        return self.name if self.custom else f"{self.name}s"


POD = ResourceKind.builtin("Pod")

BUILTIN_KINDS: Tuple[ResourceKind, ...] = tuple(
    ResourceKind.builtin(name)
    for name in ("StatefulSet", "Deployment", "Secret", "Job", "ConfigMap", "Service")
)
