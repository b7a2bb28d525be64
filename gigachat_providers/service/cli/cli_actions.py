"""CLI action handlers.

Purpose
-------
Subcommand handlers for the GigaChat CLI, keeping the entrypoint thin. This
module has no top-level side effects and is safe to import in tests.

Fallback & Error Semantics
--------------------------
- ``plan`` never touches the network; it prints the translated request body.
- ``chat`` emits normalized structured logs; provider errors are printed as
  JSON to stderr with exit code ``1``, missing credentials exit with ``2``.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, Dict, List, Optional

from ...base.logging import LogContext, get_logger, normalized_log_event
from ...base.models import ChatRequest, ChatResponse, Message
from ...base.streaming import accumulate_events
from ...config import get_provider_config
from ...config.env import get_env_var_candidates
from ...gigachat import GigaChatProvider

ProviderFactory = Callable[[], GigaChatProvider]


def build_request(prompt: str, model: Optional[str], system: Optional[str] = None, session_id: Optional[str] = None) -> ChatRequest:
    """Return the single-turn request for ``prompt``."""
    messages: List[Message] = []
    if system:
        messages.append(Message(role="system", content=system))
    messages.append(Message(role="user", content=prompt))
    return ChatRequest(model=model, messages=messages, session_id=session_id)


def plan_chat(*, prompt: str, model: Optional[str], system: Optional[str], stream: bool) -> Dict[str, Any]:
    """Compute the provider request body for a prompt without any I/O.

    Credentials are reported as present/absent only.
    """
    cfg = get_provider_config("gigachat")
    provider = GigaChatProvider()
    mdl = model or provider.default_model()
    req = build_request(prompt, mdl, system)
    return {
        "provider": provider.provider_name,
        "model": mdl,
        "base_url": cfg.get("base_url"),
        "credentials_present": provider.session is not None,
        "stream": stream,
        "body": provider._build_body(req, mdl, stream=stream),
    }


def _print_json(data: Dict[str, Any], *, file=None) -> None:
    print(json.dumps(data, ensure_ascii=False, default=str), file=file or sys.stdout)


def _run_stream(provider: GigaChatProvider, req: ChatRequest, live: bool) -> ChatResponse:
    events = []
    for ev in provider.stream_chat(req):
        events.append(ev)
        if live and ev.delta:
            sys.stdout.write(ev.delta)
            sys.stdout.flush()
    if live:
        sys.stdout.write("\n")
    return accumulate_events(events)


def handle_chat(args: argparse.Namespace, *, provider_factory: Optional[ProviderFactory] = None) -> int:
    """Execute the ``chat`` subcommand.

    Parameters
    ----------
    args: argparse.Namespace
        Parsed arguments (``prompt``, ``model``, ``system``, ``session_id``,
        ``stream``, ``json``).
    provider_factory: Optional[Callable[[], GigaChatProvider]]
        Injection point for tests; defaults to ``GigaChatProvider()``.

    Returns
    -------
    int
        ``0`` on success, ``1`` on a provider error, ``2`` when credentials
        are missing.
    """
    provider = (provider_factory or GigaChatProvider)()
    if provider.session is None:
        hint = {
            "error": "missing credentials for provider 'gigachat'",
            "set_env": list(get_env_var_candidates("gigachat", "client_id"))
            + list(get_env_var_candidates("gigachat", "client_secret")),
        }
        _print_json(hint, file=sys.stderr)
        return 2

    model = args.model or provider.default_model()
    req = build_request(args.prompt, model, args.system, args.session_id)
    logger = get_logger("gigachat.cli")
    ctx = LogContext(provider=provider.provider_name, model=model, session_id=args.session_id)
    normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1, stream=bool(args.stream))

    if args.stream:
        resp = _run_stream(provider, req, live=not args.json)
    else:
        resp = provider.chat(req)
        if not args.json and resp.error is None:
            print(resp.text or "")

    if resp.error is not None:
        normalized_log_event(
            logger,
            "cli.error",
            ctx,
            phase="finalize",
            emitted=False,
            error=resp.error,
            error_code=resp.meta.extra.get("code"),
        )
        _print_json({"error": resp.error, "code": resp.meta.extra.get("code")}, file=sys.stderr)
        return 1

    if args.json:
        _print_json(resp.to_dict())
    normalized_log_event(logger, "cli.finalize", ctx, phase="finalize", emitted=bool(resp.text or resp.tool_calls))
    return 0


def handle_plan(args: argparse.Namespace) -> int:
    """Execute the ``plan`` subcommand (prints the request body as JSON)."""
    _print_json(plan_chat(prompt=args.prompt, model=args.model, system=args.system, stream=args.stream))
    return 0


__all__ = ["build_request", "plan_chat", "handle_chat", "handle_plan"]
