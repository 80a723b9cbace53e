"""
Output Manager - Writes the sitemap files to the output directory.

Each run fully overwrites its sitemap file (e.g. ./sitemap-images.xml). The
text is written to a temporary file in the same directory and then moved onto
the target with os.replace(), so a failed write leaves the previous sitemap
in place instead of a truncated one.

Pipeline context:
    The orchestrator calls write_text() in its final step, only after the
    document has been rendered and checked.
"""

import os
import tempfile

from .errors import OutputError


class OutputManager:
    """Resolves and writes output files.

    Attributes:
        base_dir: Directory the sitemap files are written to (default: .).
    """

    def __init__(self, base_dir: str = "."):
        self.base_dir = base_dir

    def get_output_path(self, filename: str) -> str:
        """Get the full path for a file in the output directory."""
        return os.path.join(self.base_dir, filename)

    def write_text(self, filename: str, text: str) -> str:
        """Atomically replace an output file with the given UTF-8 text.

        Args:
            filename: The file name (e.g., "sitemap-videos.xml").
            text: The full file content.

        Returns:
            The path of the written file.

        Raises:
            OutputError: If the directory cannot be created or the file
                cannot be written.
        """
        path = self.get_output_path(filename)
        tmp_path = None
        try:
            os.makedirs(self.base_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{filename}.", suffix=".tmp", dir=self.base_dir
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            # Sitemaps are served as static files; mkstemp creates them 0600.
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise OutputError(f"Could not write {path}: {e}") from e
        return path
