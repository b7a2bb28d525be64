"""CLI parser construction for gigachat-cli.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

SUBCOMMANDS = ("chat", "plan")


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    Parameters
    ----------
    v: str | None
        Incoming string value (e.g., "true", "false", "1", "0"). When ``None``
        and used via argparse with ``const=True``, this returns ``True``.

    Returns
    -------
    bool
        Parsed boolean value with a permissive mapping for typical CLI inputs.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser.

    ``--stream`` accepts an optional boolean and defaults to ``True`` when
    given bare; ``--no-stream`` is equivalent to ``--stream false``. Streaming
    is on when neither flag is given.
    """
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=True)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser with ``chat`` and ``plan`` subcommands.

    No I/O or network calls occur here.
    """
    p = argparse.ArgumentParser(prog="gigachat-cli", description="GigaChat adapter debugging CLI")
    sub = p.add_subparsers(dest="cmd")

    p_chat = sub.add_parser("chat", help="Send one prompt and print the reply (default)")
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--model", default=None)
    p_chat.add_argument("--system", default=None, help="System message prepended to the prompt")
    p_chat.add_argument("--session-id", default=None, help="Conversation id sent as X-Session-ID")
    add_stream_flags(p_chat)
    p_chat.add_argument("--json", action="store_true", help="Print the completed response as JSON")

    p_plan = sub.add_parser("plan", help="Show the request body that would be sent (no network)")
    p_plan.add_argument("--prompt", required=True)
    p_plan.add_argument("--model", default=None)
    p_plan.add_argument("--system", default=None)
    add_stream_flags(p_plan)

    return p


__all__ = ["SUBCOMMANDS", "add_stream_flags", "build_parser", "_str2bool"]
