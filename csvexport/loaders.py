"""
Turning raw input into records.

Responsibilities:
- decoding uploaded bytes whatever their encoding
- parsing JSON text into an ordered list of records
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from charset_normalizer import from_bytes

from .errors import MalformedInput

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def decode_bytes(raw: bytes) -> str:
    """
    Decode input bytes to text.

    Rules:
    - A leading UTF-8 BOM selects utf-8-sig so the marker does not reach the parser.
    - Otherwise use charset-normalizer's best guess, then UTF-8.
    - If nothing decodes cleanly, raise MalformedInput.
    """
    if raw.startswith(_UTF8_BOM):
        decode_used = "utf-8-sig"
    else:
        match = from_bytes(raw).best()
        decode_used = match.encoding if match is not None else "utf-8"

    try:
        return raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        logger.warning("Decoding as %s failed, retrying as utf-8", decode_used)

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedInput(f"input is not decodable text: {exc}") from exc


def load_records(text: str) -> List[Dict[str, Any]]:
    """Parse JSON text holding an array of objects; key order is kept."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedInput(f"invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise MalformedInput(f"expected a JSON array of objects, got {type(data).__name__}")
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedInput(f"item {i} is {type(item).__name__}, expected an object")
    return data
