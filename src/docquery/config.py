"""Query configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULTS_FILE_NAME = "_defaults.md"
METADATA_DELIMITER = "---"


@dataclass(slots=True)
class QueryConfig:
    defaults_file_name: str = DEFAULTS_FILE_NAME
    encoding: str = "utf-8"
    delimiter: str = METADATA_DELIMITER

    def __post_init__(self) -> None:
        # a defaults file is always looked up by its bare name
        self.defaults_file_name = self.defaults_file_name.lstrip("/")

    def resolve_root(self, root: Path | str, base_dir: Path | None = None) -> Path:
        root = Path(root)
        if root.is_absolute() or base_dir is None:
            return root
        return base_dir / root
