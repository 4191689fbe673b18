"""Layout of the output directory tree."""

from pathlib import Path

from ..model.kinds import ResourceKind

SUBDIRECTORIES = ("get", "describe", "events", "logs")


class OutputTree:
    """Paths inside ``<namespace>_<timestamp>/``.

    Every concurrent writer targets its own file, so nothing here locks.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def create(self) -> "OutputTree":
        """Create the root and its fixed subdirectories."""
        for name in SUBDIRECTORIES:
            (self.root / name).mkdir(parents=True, exist_ok=True)
        return self

    @property
    def name(self) -> str:
        return self.root.name

    @property
    def describe_dir(self) -> Path:
        return self.root / "describe"

    @property
    def events_dir(self) -> Path:
        return self.root / "events"

    @property
    def logs_dir(self) -> Path:
        return self.root / "logs"

    @property
    def error_log(self) -> Path:
        return self.root / "error_summary.log"

    @property
    def summary(self) -> Path:
        return self.root / "summary.txt"

    def get_dir(self, kind: ResourceKind) -> Path:
        return self.root / "get" / kind.plural

    def listing_path(self, kind: ResourceKind) -> Path:
        return self.get_dir(kind) / f"{kind.plural}.txt"

    def yaml_path(self, kind: ResourceKind, name: str) -> Path:
        return self.get_dir(kind) / f"{name}.yaml"

    def describe_path(self, kind: ResourceKind, name: str) -> Path:
        return self.describe_dir / f"{kind.singular}_{name}.txt"

    def log_dir(self, pod: str) -> Path:
        return self.logs_dir / pod

    def log_path(self, pod: str, container: str) -> Path:
        return self.log_dir(pod) / f"{container}.log"

    def relative(self, path: Path) -> str:
        """Render a tree path prefixed by the tree name, as written in reports."""
        return f"{self.name}/{Path(path).relative_to(self.root).as_posix()}"
