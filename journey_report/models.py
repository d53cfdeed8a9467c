from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from . import config


@dataclass
class PhotoRecord:
    """
    One file found in the input directory.
    """
    filename: str
    source_path: Path

    # Populated by the enrichment stage
    capture_timestamp: Optional[str] = None

    def thumbnail_path(self, thumbnails_dir: Path) -> Path:
        return thumbnails_dir / self.filename


@dataclass
class RunContext:
    """
    State for a single run, owned by the orchestrator and handed to each stage.
    """
    input_dir: Path
    thumbnails_dir: Path
    report_path: Path
    gm_path: Optional[str] = None
    photos: List[PhotoRecord] = field(default_factory=list)

    @classmethod
    def for_directory(cls, input_dir: Path) -> "RunContext":
        root = Path(input_dir).resolve()
        return cls(
            input_dir=root,
            thumbnails_dir=root / config.THUMBNAILS_DIRNAME,
            report_path=root / config.REPORT_FILENAME,
        )
