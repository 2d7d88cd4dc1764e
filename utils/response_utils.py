"""Utilities for turning guidance data into response text and back.

Tool responses are indented JSON with keys in definition order so that they
read well when shown to a user and parse cleanly downstream.
"""
from __future__ import annotations

import json
from typing import Any

DEFAULT_INDENT = 2


def to_json_text(data: Any, indent: int | None = DEFAULT_INDENT) -> str:
    """Serialize plain data (dicts, lists, strings) to indented JSON text.

    Key order is preserved and non-ASCII text is written as-is.
    """
    return json.dumps(data, indent=indent, ensure_ascii=False)


def parse_json_text(text: str) -> Any:
    """Parse JSON text produced by `to_json_text`."""
    return json.loads(text)
