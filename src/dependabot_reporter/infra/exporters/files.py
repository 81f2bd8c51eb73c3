from __future__ import annotations

import os
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, TextIO

from ...core.domain.enums import OutputFormat
from ...core.errors import ReportWriteError
from ...shared.utils import report_filename


def prepare_report_path(output_dir: Path, repo: str, now: datetime, fmt: OutputFormat) -> Path:
    """Create output_dir if needed and return the timestamped report path inside it."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ReportWriteError(f"Error creating output directory {output_dir}: {e}") from e
    return output_dir / report_filename(repo, now, fmt.extension)


@contextmanager
def atomic_report_file(path: Path, newline: Optional[str] = None) -> Iterator[TextIO]:
    """Yield a handle on a temporary sibling of path, renamed onto path on success.

    On any failure the temporary file is removed, so no partial report is left.
    """
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        with tmp.open("w", encoding="utf-8", newline=newline) as fh:
            yield fh
        os.replace(tmp, path)
    except BaseException as e:
        tmp.unlink(missing_ok=True)
        if isinstance(e, OSError):
            raise ReportWriteError(f"Error writing report file {path}: {e}") from e
        raise
