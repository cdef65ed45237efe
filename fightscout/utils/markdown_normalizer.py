from __future__ import annotations

import re

_DOCUMENT_FENCE_RE = re.compile(
    r"\A\s*```(?:markdown|md)?[ \t]*\n([\s\S]*?)\n```\s*\Z", re.IGNORECASE
)
# en dash, em dash, minus sign directly after a bracketed start time
_TIMESTAMP_RANGE_DASH_RE = re.compile(r"([\[\(]\d{1,2}:\d{2})[–—−]")


def _unwrap_document_fence(text: str) -> str:
    m = _DOCUMENT_FENCE_RE.match(text)
    if not m:
        return text
    body = m.group(1)
    # Leave genuine code samples alone: only unwrap when the body looks like a report
    if not re.search(r"^\s*(#{1,3}\s|\*\*)", body, re.MULTILINE):
        return text
    return body


def normalize_report_markdown(text: str) -> str:
    """Normalize model Markdown before section parsing.

    - Convert CRLF / CR line endings to LF
    - Unwrap a report that was returned inside a single ```markdown fence
    - Turn a unicode dash inside a timestamp bracket into a hyphen so
      ``[0:45–1:00]`` reads as a range

    Everything else, prose dashes and curly quotes included, is left as written.
    """
    if not text:
        return text
    out = text.replace("\r\n", "\n").replace("\r", "\n")
    out = _unwrap_document_fence(out)
    return _TIMESTAMP_RANGE_DASH_RE.sub(r"\1-", out)
