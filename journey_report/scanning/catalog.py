import os
import logging
from pathlib import Path
from typing import List

from .. import config
from ..exceptions import DirectoryReadError
from ..models import PhotoRecord, RunContext


class CatalogBuilder:
    def build(self, context: RunContext) -> List[PhotoRecord]:
        """
        Creates one PhotoRecord per entry of the input directory.

        No filtering by extension: anything that is not a photo fails later
        when its capture time is read. Only the run's own outputs are skipped.
        """
        root = context.input_dir
        try:
            with os.scandir(root) as it:
                names = [e.name for e in it if e.name not in config.RESERVED_NAMES]
        except OSError as e:
            raise DirectoryReadError(f"Cannot list {root}: {e}") from e

        # Byte order of names, as a sorted directory listing returns them
        names.sort()

        context.photos = [PhotoRecord(filename=n, source_path=root / n) for n in names]
        logging.info(f"Found {len(context.photos)} photos in {root}")
        return context.photos
