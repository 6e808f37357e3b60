# savepoint/render/inline.py
from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from ..config import AGENT_LINE_CHARS, AGENT_MAX_LINES
from .template import AGENT_TEMPLATE

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore

NOTE_KEY_PREFIX = "sp_blanker_"
BODY_CLOSE = "</body>"

_TITLE_MARKER = "__GAME_TITLE_JSON__"
_PREFIX_MARKER = "__NOTE_KEY_PREFIX_JSON__"
_LINES_MARKER = "__MAX_LINES__"
_CHARS_MARKER = "__LINE_CHARS__"
_MARKERS = (_TITLE_MARKER, _PREFIX_MARKER, _LINES_MARKER, _CHARS_MARKER)


def derive_note_key(title: str) -> str:
    """Note key the agent files its notes under (prefix + encodeURIComponent(title))."""
    return NOTE_KEY_PREFIX + quote(str(title), safe="-_.!~*'()")


def _script_json(value: Any) -> str:
    if orjson is not None:
        s = orjson.dumps(value).decode("utf-8")
    else:
        s = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    # U+2028/2029 are legal JSON but terminate JS string literals in older engines.
    s = s.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
    return s.replace("</", r"<\/")  # script-safe injection


def build_agent_html(title: str, *, max_lines: int = AGENT_MAX_LINES, line_chars: int = AGENT_LINE_CHARS) -> str:
    # Hardening:
    #   - Each marker must appear exactly once in the template.
    #   - No marker may survive injection.
    if not isinstance(title, str):
        raise TypeError(f"title must be str, got {type(title).__name__}")
    for m in _MARKERS:
        n = AGENT_TEMPLATE.count(m)
        if n != 1:
            raise RuntimeError(f"AGENT_TEMPLATE must contain {m} exactly once (found {n})")

    html = (
        AGENT_TEMPLATE
        .replace(_PREFIX_MARKER, _script_json(NOTE_KEY_PREFIX))
        .replace(_LINES_MARKER, str(int(max_lines)))
        .replace(_CHARS_MARKER, str(int(line_chars)))
        .replace(_TITLE_MARKER, _script_json(title))
    )
    return html


def inject_before_body_close(document: str, payload: str) -> str:
    """Insert `payload` right before the first </body>; unchanged when absent."""
    idx = document.find(BODY_CLOSE)
    if idx == -1:
        return document
    return document[:idx] + payload + document[idx:]
