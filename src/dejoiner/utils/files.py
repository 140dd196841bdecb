"""Reading JSON input files."""

import json
from pathlib import Path
from typing import Any

from dejoiner.exceptions import DocumentFormatError, InputFileNotFoundError


def read_json_file(path: str | Path) -> Any:
    """Load a JSON file.

    Raises:
        InputFileNotFoundError: If the path is missing or a directory.
        DocumentFormatError: If the file is not valid JSON.
    """
    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise InputFileNotFoundError(f"File does not exist: {path}")
    if file_path.is_dir():
        raise InputFileNotFoundError(f"Path is a directory: {path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DocumentFormatError(f"{path} is not valid JSON: {e}") from e
