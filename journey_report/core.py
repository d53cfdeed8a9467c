import logging
from pathlib import Path
from typing import Optional

from . import config
from .exceptions import DirectoryInvalid
from .metadata.enrich import TimestampEnricher
from .metadata.extract import MetadataExtractor
from .models import RunContext
from .reporting import ReportAssembler
from .scanning.catalog import CatalogBuilder
from .thumbnails.batch import ThumbnailBatchProcessor


class JourneyReportApp:
    def __init__(self,
                 config_path: Optional[Path] = None,
                 extractor: Optional[MetadataExtractor] = None,
                 thumbnailer: Optional[ThumbnailBatchProcessor] = None,
                 assembler: Optional[ReportAssembler] = None):
        self.config_path = config_path
        self.catalog = CatalogBuilder()
        self.enricher = TimestampEnricher(extractor)
        self.thumbnailer = thumbnailer or ThumbnailBatchProcessor()
        self.assembler = assembler or ReportAssembler()

    def run(self, input_dir: Path) -> RunContext:
        """
        Executes the journey report pipeline.
        1. Validate the input directory
        2. Load the GraphicsMagick configuration
        3. Catalog the photos
        4. Read capture times
        5. Create the thumbnails directory
        6. Resize in one batch
        7. Render the report

        The first failing stage raises and nothing after it runs. Output
        already created is left in place.
        """
        context = RunContext.for_directory(input_dir)
        self._check_directory(context.input_dir)

        tool_config = config.load_tool_config(self.config_path)
        context.gm_path = tool_config.gm_path

        self.catalog.build(context)
        self.enricher.enrich(context)

        self.thumbnailer.process(context)

        self.assembler.write(context)

        logging.info(f"Journey report complete: {context.report_path}")
        return context

    def _check_directory(self, directory: Path):
        if not directory.exists():
            raise DirectoryInvalid(f"{directory} does not exist.")
        if not directory.is_dir():
            raise DirectoryInvalid(f"{directory} is not a directory.")
