import json
from enum import Enum
from pathlib import Path


class JsonFileType(str, Enum):
    """Enumeration for the different states of a JSON file check."""

    MISSING = "MISSING"
    VALID_JSON = "VALID_JSON"
    MALFORMED_JSON = "MALFORMED_JSON"


def check_json_file(file_path: Path) -> JsonFileType:
    """
    Checks whether an editor settings file exists and parses as JSON.

    VSCode writes comments into some of its files; those are reported as
    malformed since the installer cannot merge into them safely.
    """
    if not file_path.is_file():
        return JsonFileType.MISSING

    try:
        json.loads(file_path.read_text(encoding="utf-8"))
        return JsonFileType.VALID_JSON
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JsonFileType.MALFORMED_JSON
