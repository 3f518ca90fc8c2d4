import json
from pathlib import Path
from typing import Any

from services.errors import FormatError, InputReadError

GenericRecord = dict[str, Any]


def reject_constant(name: str):
    """NaN / Infinity / -Infinity は JSON ではないので受け付けない"""
    raise ValueError(f"invalid JSON constant {name}")


def load_json_records(path: str) -> list[GenericRecord]:
    """JSON 配列（オブジェクトの配列）を読み込んで返す

    各要素のキー順は JSON 上の順序のまま保持される。
    """
    input_path = Path(path)
    try:
        with open(input_path, "r", encoding="utf-8-sig") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"Error reading JSON file: {e}") from e

    try:
        payload = json.loads(text, parse_constant=reject_constant)
    except ValueError as e:
        raise FormatError(f"Error parsing JSON: {e}") from e

    if not isinstance(payload, list):
        raise FormatError("Error parsing JSON: top level must be an array of objects")

    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise FormatError(f"Error parsing JSON: element {index} is not an object")

    return payload
