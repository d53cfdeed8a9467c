import logging
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment

from . import config
from .exceptions import TemplateReadError, OutputWriteError
from .models import PhotoRecord, RunContext

_jinja_env = Environment(autoescape=True, keep_trailing_newline=True)


def format_generated_at(now: datetime) -> str:
    """ISO 8601 in UTC with milliseconds and a 'Z' suffix."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    utc = now.astimezone(UTC)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


class ReportAssembler:
    def __init__(self, template_path: Optional[Path] = None):
        self.template_path = template_path or config.TEMPLATE_PATH

    def build_view(self, photos: List[PhotoRecord], now: datetime) -> Dict[str, Any]:
        return {
            "generated_at": format_generated_at(now),
            "photos": [
                {
                    "filename": record.filename,
                    "alt_text": f"Photo captured at {record.capture_timestamp}.",
                    "timestamp": record.capture_timestamp,
                }
                for record in photos
            ],
        }

    def render(self, view: Dict[str, Any]) -> str:
        try:
            source = self.template_path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateReadError(f"Cannot read template {self.template_path}: {e}") from e
        return _jinja_env.from_string(source).render(view)

    def write(self, context: RunContext, now: Optional[datetime] = None) -> Path:
        """
        Renders the journey page for the enriched photos and writes it to
        the report path.
        """
        view = self.build_view(context.photos, now or datetime.now(UTC))
        content = self.render(view)

        try:
            context.report_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(f"Cannot write {context.report_path}: {e}") from e

        logging.info(f"Report written to {context.report_path} ({len(view['photos'])} photos)")
        return context.report_path
