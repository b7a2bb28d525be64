"""Server-sent events framing for streamed completions.

The completion endpoint streams ``data: {...}`` lines terminated by
``data: [DONE]``. :func:`sse_payload` reduces one raw line to the JSON text a
normalizer should parse, and :class:`ResponseLines` wraps an open
``httpx.Response`` so the stream adapter can iterate and close it.
"""
from __future__ import annotations

from typing import Iterator, Optional, Union

import httpx

DONE = "[DONE]"

_IGNORED_FIELDS = ("event:", "id:", "retry:")


def sse_payload(line: Union[str, bytes, None]) -> Optional[str]:
    """Return the payload of one SSE line, or ``None`` when there is none.

    - blank lines, comments (``:``) and non-data fields yield ``None``;
    - ``data:`` prefixes are stripped;
    - the terminator yields :data:`DONE`;
    - a bare JSON line (no prefix) is returned unchanged.
    """
    if line is None:
        return None
    text = line.decode("utf-8") if isinstance(line, bytes) else str(line)
    text = text.strip()
    if not text or text.startswith(":"):
        return None
    if text.startswith("data:"):
        text = text[5:].strip()
        if not text:
            return None
    elif text.startswith(_IGNORED_FIELDS):
        return None
    return DONE if text == DONE else text


class ResponseLines:
    """Iterable over the lines of a streamed ``httpx.Response``.

    ``close()`` is idempotent and may be called from another thread (for
    example by a cancellation callback) to unblock a pending read.
    """

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self._closed = False

    def __iter__(self) -> Iterator[str]:
        try:
            yield from self.response.iter_lines()
        finally:
            self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.response.close()


__all__ = ["DONE", "sse_payload", "ResponseLines"]
