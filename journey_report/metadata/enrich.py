import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional

from tqdm import tqdm

from ..models import RunContext
from .extract import MetadataExtractor


class TimestampEnricher:
    def __init__(self, extractor: Optional[MetadataExtractor] = None):
        self.extractor = extractor or MetadataExtractor()

    def enrich(self, context: RunContext):
        """
        Reads every photo's capture time in parallel and stores it on its record.

        All or nothing: the first photo that fails aborts the stage with its
        error. Each task writes only to its own record, so no lock is needed.
        """
        photos = context.photos
        if not photos:
            return

        logging.info(f"Reading capture times of {len(photos)} photos...")

        # One worker per photo: reads are I/O bound and small
        with ThreadPoolExecutor(max_workers=len(photos)) as executor:
            future_to_record = {
                executor.submit(self.extractor.capture_timestamp, record.source_path): record
                for record in photos
            }

            try:
                for future in tqdm(as_completed(future_to_record),
                                   total=len(future_to_record),
                                   desc="Capture times",
                                   disable=None):
                    record = future_to_record[future]
                    record.capture_timestamp = future.result()
            except Exception:
                for pending in future_to_record:
                    pending.cancel()
                raise
