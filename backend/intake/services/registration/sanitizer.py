"""Sanitation of untrusted form values."""
from __future__ import annotations

from typing import Any

from markupsafe import escape


def sanitize_input(value: Any) -> str:
    """Strip NUL bytes, trim and HTML-escape a submitted value.

    ``None`` (an absent field) becomes an empty string.
    """
    if value is None:
        return ''
    if not isinstance(value, str):
        value = str(value)
    value = value.replace('\x00', '').strip()
    return str(escape(value))
