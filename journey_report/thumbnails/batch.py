import logging
import subprocess
from typing import List

from .. import config
from ..exceptions import DirectoryCreateError, ThumbnailBatchFailed
from ..models import RunContext


def quote_batch_arg(value: str) -> str:
    """Double-quotes an argument for the GraphicsMagick batch tokenizer."""
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


class ThumbnailBatchProcessor:
    """
    Produces all thumbnails with a single 'gm batch' invocation.

    One child process reads one 'convert' directive per photo from stdin, so
    the startup cost of GraphicsMagick is paid once per run.
    """

    def process(self, context: RunContext):
        self.create_directory(context)
        self.run(context)

    def create_directory(self, context: RunContext):
        # No exist_ok: an existing directory means a previous run's output
        try:
            context.thumbnails_dir.mkdir()
        except OSError as e:
            raise DirectoryCreateError(
                f"Cannot create {context.thumbnails_dir}: {e}"
            ) from e

    def build_directives(self, context: RunContext) -> List[str]:
        """One 'convert' line per photo, in catalog order."""
        directives = []
        for record in context.photos:
            # gm reads one directive per line
            source = str(record.source_path)
            if "\n" in source or "\r" in source:
                raise ThumbnailBatchFailed(
                    f"Cannot batch {source!r}: line break in path"
                )
            thumbnail = record.thumbnail_path(context.thumbnails_dir)
            directives.append(" ".join([
                "convert",
                "-auto-orient",
                "-geometry", config.THUMBNAIL_GEOMETRY,
                "+profile", '"*"',
                quote_batch_arg(source),
                quote_batch_arg(str(thumbnail)),
            ]))
        return directives

    def run(self, context: RunContext):
        directives = self.build_directives(context)
        if not directives:
            logging.info("No photos to resize.")
            return

        cmd = [context.gm_path] + config.GM_BATCH_ARGS
        logging.info(f"Resizing {len(directives)} photos with {context.gm_path}...")

        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise ThumbnailBatchFailed(
                f"Cannot launch GraphicsMagick ({context.gm_path}): {e}",
                launch_error=e,
            ) from e

        # communicate() closes stdin after the last directive and waits for exit
        batch_input = "".join(f"{line}\n" for line in directives)
        out, err = proc.communicate(batch_input)

        if out:
            logging.debug(f"GraphicsMagick output:\n{out}")
        if proc.returncode != 0:
            detail = f": {err.strip()}" if err and err.strip() else ""
            raise ThumbnailBatchFailed(
                f"GraphicsMagick exit with code {proc.returncode}{detail}",
                exit_code=proc.returncode,
            )
        if err:
            logging.debug(f"GraphicsMagick stderr:\n{err}")

        logging.info(f"Thumbnails written to {context.thumbnails_dir}")
