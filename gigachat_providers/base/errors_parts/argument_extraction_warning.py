"""Warning category for tool-argument fragments with an unexpected shape."""

from __future__ import annotations


class ArgumentExtractionWarning(UserWarning):
    """Emitted when a delta's tool-call fragment cannot be read.

    The fragment is skipped and streaming continues; the warning is logged as
    ``stream.args.malformed`` and surfaced through :mod:`warnings`.
    """


__all__ = ["ArgumentExtractionWarning"]
