"""Call helpers for the host boundary and for scripted instruction files.

Every call returns a ``CallResult``. Caller mistakes (bad dimensions, a
rejected range, overflow, wrong argument types, an unknown entry point) are
reported as failed results instead of escaping as exceptions.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from commands.registry import get_command
from core.exceptions import ComputeKernelsError

logger = logging.getLogger("compute_kernels")

CALLER_ERRORS = (ComputeKernelsError, OverflowError, TypeError, ValueError)


@dataclass(frozen=True)
class CallResult:
    """Outcome of one entry-point call."""

    name: str
    ok: bool
    value: Any = None
    error: str | None = None
    error_type: str | None = None

    def unwrap(self) -> Any:
        """Return ``value`` or raise ``RuntimeError`` for a failed call."""
        if not self.ok:
            raise RuntimeError(f"{self.name} failed: {self.error_type}: {self.error}")
        return self.value


def execute_call(context, name: str, *args, get_command_fn=get_command) -> CallResult:
    """Invoke entry point ``name`` with positional ``args``."""
    try:
        command, extra_args = get_command_fn(name)
    except (LookupError, ValueError):
        command, extra_args = None, []
    if command is None:
        logger.warning("Unknown entry point: %s", name)
        return CallResult(
            name=name,
            ok=False,
            error=f"Unknown entry point '{name}'",
            error_type="UnknownEntryPoint",
        )

    try:
        value = command.execute(context, list(extra_args) + list(args))
    except CALLER_ERRORS as exc:
        logger.warning("%s failed: %s", name, exc)
        return CallResult(
            name=name, ok=False, error=str(exc), error_type=type(exc).__name__
        )

    logger.debug("%s%r -> %r", name, tuple(args), value)
    return CallResult(name=name, ok=True, value=value)


def _decode_token(token: str) -> Any:
    try:
        return json.loads(token)
    except json.JSONDecodeError:
        return token


def execute_command_line(context, line: str, *, get_command_fn=get_command):
    """Execute one instruction line such as ``count_primes 1000``.

    Arguments are whitespace separated and each is decoded as JSON, so a
    matrix is written without spaces: ``multiply_matrices [[1,0],[0,1]] ...``.
    Blank lines and ``#`` comments return None.
    """
    line = (line or "").strip()
    if not line or line.startswith("#"):
        return None

    parts = line.split()
    result = execute_call(
        context,
        parts[0],
        *[_decode_token(tok) for tok in parts[1:]],
        get_command_fn=get_command_fn,
    )
    history = getattr(context, "history", None)
    if history is not None:
        history.append(line)
    return result


def run_instructions(context, lines: Iterable[str]) -> list[CallResult]:
    """Execute every instruction in ``lines`` and collect the results."""
    results = []
    for line in lines:
        result = execute_command_line(context, line)
        if result is not None:
            results.append(result)
    return results
