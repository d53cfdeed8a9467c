"""
Custom exception hierarchy for the journey report generator.

Every stage of the pipeline raises one of these; the CLI turns them into a
message on stderr and an exit status.
"""
from pathlib import Path
from typing import Optional


class JourneyReportError(Exception):
    """Base exception for all journey report errors."""
    exit_code = 2


class InvalidArguments(JourneyReportError):
    """Raised when the command line does not name exactly one input directory."""
    exit_code = 1


class DirectoryInvalid(JourneyReportError):
    """Raised when the input directory is missing or not a directory."""
    exit_code = 3


class ConfigurationError(JourneyReportError):
    """Raised when the tool configuration is unreadable or incomplete."""
    exit_code = 4


class DirectoryReadError(JourneyReportError):
    """Raised when the input directory cannot be listed."""
    exit_code = 5


class MetadataError(JourneyReportError):
    """Base for per-photo metadata problems."""
    exit_code = 6

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path


class MetadataUnavailable(MetadataError):
    """Raised when a file has no readable embedded metadata."""
    pass


class ExifMissing(MetadataError):
    """Raised when metadata exists but carries no EXIF block."""
    pass


class CaptureTimeMissing(MetadataError):
    """Raised when the EXIF block has no usable DateTimeOriginal."""
    pass


class DirectoryCreateError(JourneyReportError):
    """Raised when the thumbnails directory cannot be created."""
    exit_code = 7


class ThumbnailBatchFailed(JourneyReportError):
    """Raised when the GraphicsMagick batch job fails to launch or exits nonzero."""
    exit_code = 8

    def __init__(self, message: str,
                 exit_code: Optional[int] = None,
                 launch_error: Optional[OSError] = None):
        super().__init__(message)
        self.returncode = exit_code
        self.launch_error = launch_error


class TemplateReadError(JourneyReportError):
    """Raised when the report template cannot be read."""
    exit_code = 9


class OutputWriteError(JourneyReportError):
    """Raised when the report document cannot be written."""
    exit_code = 10
