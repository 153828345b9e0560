from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from .errors import ResultsFileMalformed, ResultsFileNotFound, ResultsFileUnreadable
from .logging import ZeklinLogger
from .utils import json_dumps


def resolve_results_path(output_file_path: str, workdir: Optional[str]) -> Path:
    """Absolute paths win; relative ones live under workdir (or the cwd)."""
    path = Path(output_file_path)
    if path.is_absolute():
        return path
    if workdir:
        return Path(workdir) / path
    return path


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_results(text: str, path: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ResultsFileMalformed(path, str(exc)) from exc


def find_results(
    output_file_path: str,
    workdir: Optional[str],
    logger: Optional[ZeklinLogger] = None,
) -> Any:
    """Read and parse the results file; the content is otherwise opaque."""
    path = resolve_results_path(output_file_path, workdir)
    display = str(path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError as exc:
        raise ResultsFileNotFound(display) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ResultsFileUnreadable(display, str(exc)) from exc

    results = parse_results(text, display)
    if logger:
        logger.debug("results_found", path=display, results=json_dumps(results))
    return results
