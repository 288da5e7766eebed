"""
Debug output for Kubux Grid.

Diagnostics are written to stderr with a timestamp and a component tag.
Output is off by default; the command line enables it with --debug.
"""

from datetime import datetime
import sys


_debug_enabled: bool = False


def set_debug(enabled: bool):
    """Enable or disable debug output."""
    global _debug_enabled
    _debug_enabled = enabled


def debug_print(component: str, msg: str) -> None:
    if not _debug_enabled:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {component}: {msg}", file=sys.stderr)
