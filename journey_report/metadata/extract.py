import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

import exifread

from .. import config
from ..exceptions import MetadataUnavailable, ExifMissing, CaptureTimeMissing

# "YYYY:MM:DD HH:MM:SS" as written by cameras; ISO separators are tolerated.
# Anything after the seconds (sub-seconds, zone marker) is ignored.
_CAPTURE_TIME_RE = re.compile(
    r'^\s*(\d{4})[:-](\d{2})[:-](\d{2})[ T](\d{2}):(\d{2}):(\d{2})'
)


def normalize_capture_time(raw: str) -> Optional[str]:
    """
    Converts an EXIF date string into 'YYYY-MM-DDTHH:MM:SS'.

    The wall-clock fields are kept as recorded: the camera's local time, with
    no conversion to UTC. Returns None if the value is not a real date.
    """
    if not raw:
        return None

    match = _CAPTURE_TIME_RE.match(raw)
    if not match:
        return None

    try:
        dt = datetime(*(int(part) for part in match.groups()))
    except ValueError:
        # e.g. "0000:00:00 00:00:00" written by cameras with no clock set
        return None

    return dt.isoformat(timespec='seconds')


class MetadataExtractor:
    """
    Reads the capture time embedded in a photo.

    Uses 'exifread', which parses JPEG/TIFF/RAW/HEIC headers without decoding
    pixel data.
    """

    def capture_timestamp(self, path: Path) -> str:
        """
        Returns the canonical capture timestamp of the photo at `path`.

        Raises:
            MetadataUnavailable: file unreadable or without embedded metadata
            ExifMissing: metadata present but no EXIF block
            CaptureTimeMissing: EXIF block without a usable DateTimeOriginal
        """
        tags = self._read_tags(path)

        if not tags:
            raise MetadataUnavailable(path, f"No metadata in {path}.")

        if not any(key.startswith(config.EXIF_TAG_PREFIX) for key in tags):
            raise ExifMissing(path, f"No EXIF data in {path}.")

        tag = tags.get(config.CAPTURE_TIME_TAG)
        if tag is None:
            raise CaptureTimeMissing(path, f"Cannot find capture time in {path}.")

        timestamp = normalize_capture_time(str(tag).strip())
        if timestamp is None:
            raise CaptureTimeMissing(path, f"Unparseable capture time {str(tag)!r} in {path}.")

        logging.debug(f"{path.name}: captured at {timestamp}")
        return timestamp

    def _read_tags(self, path: Path) -> dict:
        try:
            with path.open('rb') as f:
                # details=False skips MakerNotes and speeds up processing significantly
                return exifread.process_file(f, details=False)
        except OSError as e:
            raise MetadataUnavailable(path, f"Cannot read {path}: {e}") from e
        except Exception as e:
            raise MetadataUnavailable(path, f"ExifRead failed for {path}: {e}") from e
