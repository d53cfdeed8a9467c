"""
Configuration constants and the external tool configuration loader.
"""
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

# --- Output Layout ---
THUMBNAILS_DIRNAME = "thumbnails"
REPORT_FILENAME = "index.html"

# Names the run writes into the input directory; never catalogued as photos
RESERVED_NAMES = {THUMBNAILS_DIRNAME, REPORT_FILENAME}

TEMPLATE_PATH = Path(__file__).parent / "templates" / "index.html.j2"

# --- Metadata Parsing ---
CAPTURE_TIME_TAG = 'EXIF DateTimeOriginal'
EXIF_TAG_PREFIX = 'EXIF '

# --- Thumbnails ---
# Trailing '>' makes GraphicsMagick shrink only, never enlarge
THUMBNAIL_GEOMETRY = "1280x720>"
GM_BATCH_ARGS = ["batch", "-stop-on-error", "on", "-"]

# --- Tool Configuration ---
CONFIG_ENV_VAR = "JOURNEY_REPORT_CONFIG"
DEFAULT_CONFIG_FILENAME = "config.json"
GM_PATH_KEY = "gmPath"


@dataclass
class ToolConfig:
    gm_path: str


def default_config_path() -> Path:
    """$JOURNEY_REPORT_CONFIG if set, else config.json in the working directory."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def load_tool_config(path: Optional[Path] = None) -> ToolConfig:
    """
    Reads the JSON configuration naming the GraphicsMagick executable.

    Expected shape: {"gmPath": "/usr/bin/gm"}
    """
    config_path = Path(path) if path else default_config_path()

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration {config_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed configuration {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration {config_path} must be a JSON object.")

    gm_path = data.get(GM_PATH_KEY)
    if not isinstance(gm_path, str) or not gm_path.strip():
        raise ConfigurationError("Path of GraphicsMagick is unspecified")

    return ToolConfig(gm_path=gm_path.strip())
