# allrgb/utils.py
from __future__ import annotations

"""
Console output for the CLI and the optimizers.

Exports:
  format_duration(seconds)
  key_value_pairs_to_string(pairs)
  print_config_line(section, pairs, debug)
  print_banner(title)
  enable_line_buffered_stdout()
  log / debug_log / warn / error
"""

import sys
from typing import Any, Iterable, Tuple


def format_duration(seconds: float) -> str:
    """'850.0ms', '12.345s' or '3m 07.2s'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes, rest = divmod(seconds, 60.0)
    return f"{int(minutes)}m {rest:04.1f}s"


def _display(value: Any) -> str:
    # bool first: it is also an int
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def key_value_pairs_to_string(pairs: Iterable[Tuple[str, Any]]) -> str:
    """'Name: value' blocks joined by two spaces, e.g. 'Seed: 42  Orient: off'."""
    return "  ".join(f"{name}: {_display(value)}" for name, value in pairs)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    One config line, e.g.:
      [run] Size: 512x512  Seed: 42  Swap passes: 50
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    print(f"\n=== {title} ===", flush=True)


def enable_line_buffered_stdout() -> None:
    """Flush each line when stdout is piped, so pass reports show up live."""
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (ValueError, OSError):
            pass


def log(message: str) -> None:
    print(message, flush=True)


def debug_log(message: str) -> None:
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_duration",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "enable_line_buffered_stdout",
    "log",
    "debug_log",
    "warn",
    "error",
]
