import argparse
import logging
import os
import sys
from pathlib import Path

from .core import JourneyReportApp
from .exceptions import InvalidArguments, JourneyReportError

EXIT_INCORRECT_ARGUMENTS = InvalidArguments.exit_code
EXIT_PIPELINE_FAILURE = JourneyReportError.exit_code
EXIT_INTERRUPTED = 130

LOG_LEVEL_ENV_VAR = "JOURNEY_REPORT_LOG_LEVEL"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_INCORRECT_ARGUMENTS, f"{self.prog}: error: {message}\n")


def setup_logging():
    """Logs to stderr; nothing is written into the input directory."""
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    log_level = getattr(logging, level_name, None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)


def parse_args(argv=None):
    p = _ArgumentParser(
        prog="journey-report",
        add_help=False,
        description="Journey Report: thumbnails and an HTML page for a directory of photos"
    )
    p.add_argument("input_dir", type=Path, help="Directory of photos")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    setup_logging()
    logging.info(f"Input: {args.input_dir}")

    app = JourneyReportApp()

    try:
        app.run(args.input_dir)
    except JourneyReportError as e:
        logging.error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return EXIT_INTERRUPTED
    except Exception:
        logging.exception("Fatal error while generating the journey report.")
        return EXIT_PIPELINE_FAILURE

    return 0


if __name__ == "__main__":
    sys.exit(main())
