"""Zip archival of a finished output tree."""

import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from ..model.config import RunConfig
from ..utils.logger import get_logger
from .tree import OutputTree

logger = get_logger(__name__)


class ZipArchiver:
    """Bundles the output tree with the ``zip`` binary.

    Archival is best effort: when zip is missing or fails, the uncompressed
    tree stays the authoritative output.
    """

    def __init__(self, config: RunConfig):
        self.config = config
        self.zip_available = self._check_zip()

    def _check_zip(self) -> bool:
        """Check if zip is available."""
        try:
            subprocess.run(["zip", "-v"], capture_output=True, check=True)
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            logger.warning("zip not available")
            return False

    def _execute(self, args: List[str]) -> Tuple[bool, str]:
        """Execute zip inside the base directory."""
        cmd = ["zip"] + args
        try:
            subprocess.run(
                cmd, cwd=self.config.base_dir, capture_output=True, text=True, check=True
            )
            return True, ""
        except subprocess.CalledProcessError as e:
            return False, e.stderr or e.stdout or f"exit status {e.returncode}"

    @property
    def archive_path(self) -> Path:
        return self.config.base_dir / f"{self.config.output_name}.zip"

    @property
    def summary_copy_path(self) -> Path:
        return (
            self.config.base_dir
            / f"summary_{self.config.namespace}_{self.config.timestamp}.txt"
        )

    def archive(self, tree: OutputTree) -> Tuple[Optional[Path], Optional[Path]]:
        """Zip the tree and copy its summary next to the archive.

        Returns ``(archive, summary_copy)``, both ``None`` when archival was skipped.
        """
        logger.info(f"Creating ZIP archive: {self.archive_path.name}")

        if not self.zip_available:
            logger.error("'zip' command not found. Please install zip or omit the -z flag.")
            logger.error(f"The uncompressed output is still available in: {tree.root}")
            return None, None

        success, output = self._execute(["-r", "-q", self.archive_path.name, tree.name])
        if not success:
            logger.error(f"Failed to create ZIP archive: {output.strip()}")
            logger.error(f"The uncompressed output is still available in: {tree.root}")
            return None, None
        logger.info(f"ZIP archive created successfully: {self.archive_path}")

        shutil.copyfile(tree.summary, self.summary_copy_path)
        logger.info(f"Summary file copied to: {self.summary_copy_path}")
        return self.archive_path, self.summary_copy_path
