import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class ArtifactWriter:
    """Writes generated redirect artifacts below a base directory."""

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path).resolve()
        if not self.base_path.exists():
            os.makedirs(self.base_path, exist_ok=True)

    def _safe_path(self, path: str) -> Path:
        # Prevent traversal
        target = (self.base_path / path).resolve()
        if not target.is_relative_to(self.base_path):
            raise ValueError(f"Path traversal attempt detected: {path}")
        return target

    def write_text(self, name: str, content: str) -> Path:
        """Write text and return the written path."""
        target = self._safe_path(name)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", target)
        return target
