"""GigaChat debugging CLI (package entrypoint).

Wires argument parsing to the action handlers in ``cli_actions``; performs no
provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_chat, handle_plan
from .cli_parser import SUBCOMMANDS, build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``. The ``chat``
        subcommand is assumed when none is given.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    argv_list = list(sys.argv[1:] if argv is None else argv)
    if not argv_list or argv_list[0] not in SUBCOMMANDS and argv_list[0] not in {"-h", "--help"}:
        argv_list = ["chat"] + argv_list
    args = build_parser().parse_args(argv_list)
    return handle_plan(args) if args.cmd == "plan" else handle_chat(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
