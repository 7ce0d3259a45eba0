"""
formatter.py -- Renders ScoreResult and PermissionSet to terminal output or JSON.
"""

import json
import os
import re
import sys
from typing import Optional

from .models import PermissionSet, ScoreResult, StrengthLabel

W = 60  # output width

# ---------------------------------------------------------------------------
# ANSI color control
# ---------------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from a string."""
    return _ANSI_RE.sub("", text)


def _use_color() -> bool:
    """Return True if stdout is a TTY and color has not been disabled.

    Respects NO_COLOR env var (https://no-color.org) and FORCE_COLOR.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


_color_enabled: Optional[bool] = None  # None = auto-detect


def disable_color() -> None:
    """Force-disable color output (called when --no-color flag is set)."""
    global _color_enabled
    _color_enabled = False


def enable_color() -> None:
    global _color_enabled
    _color_enabled = True


def _color_active() -> bool:
    if _color_enabled is not None:
        return _color_enabled
    return _use_color()


STRENGTH_COLORS = {
    StrengthLabel.VERY_WEAK: "\033[91m",  # red
    StrengthLabel.WEAK: "\033[91m",
    StrengthLabel.MEDIUM: "\033[93m",  # yellow
    StrengthLabel.STRONG: "\033[92m",  # green
    StrengthLabel.VERY_STRONG: "\033[92m",
}


def _reset() -> str:
    return "\033[0m" if _color_active() else ""


def _bold() -> str:
    return "\033[1m" if _color_active() else ""


def _green() -> str:
    return "\033[92m" if _color_active() else ""


def _red() -> str:
    return "\033[91m" if _color_active() else ""


def _s_color(label: StrengthLabel) -> str:
    return STRENGTH_COLORS.get(label, "") if _color_active() else ""


# ---------------------------------------------------------------------------
# Layout helpers
# ---------------------------------------------------------------------------


def _bar(char: str = "═") -> str:
    return char * W


def _section(title: str) -> str:
    return f"\n  {_bold()}{title}{_reset()}\n  {'─' * (W - 2)}"


def _meter(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return "█" * filled + "░" * (width - filled)


_CRITERIA_LABELS = {
    "has_min_length": "At least 8 characters",
    "has_lowercase": "Lowercase letter",
    "has_uppercase": "Uppercase letter",
    "has_digit": "Number",
    "has_symbol": "Special character",
    "has_no_whitespace": "No spaces",
    "has_no_common_pattern": "No common patterns",
}

# ---------------------------------------------------------------------------
# Terminal renderers
# ---------------------------------------------------------------------------


def print_report(result: ScoreResult, title: str = "PASSWORD STRENGTH") -> None:
    """Print a full report for one evaluated password. The password itself is never echoed."""
    bold = _bold()
    reset = _reset()
    color = _s_color(result.strength)

    print(f"\n{bold}{_bar()}{reset}")
    print(f"  {bold}{title}{reset}  │  {color}{bold}{result.strength.value}{reset}")
    print(f"{bold}{_bar()}{reset}")

    print(f"\n    {color}{_meter(result.score)}{reset}  {result.score}/100")

    print(_section("CRITERIA"))
    for name, met in result.criteria.as_dict().items():
        mark = f"{_green()}✓{reset}" if met else f"{_red()}✗{reset}"
        print(f"    {mark} {_CRITERIA_LABELS.get(name, name)}")

    print(_section("FEEDBACK"))
    for line in result.feedback:
        print(f"    • {line}")

    print(f"\n{_bar()}\n")


def print_permissions(permission_set: PermissionSet) -> None:
    bold = _bold()
    reset = _reset()
    print(f"\n{bold}{_bar()}{reset}")
    print(f"  {bold}ROLE: {permission_set.role.value}{reset}  │  {len(permission_set)} permission(s)")
    print(f"{bold}{_bar()}{reset}")
    for permission in permission_set:
        print(f"    • {permission}")
    print(f"\n{_bar()}\n")


# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def to_json(result: ScoreResult) -> str:
    """Return the flat ScoreResult record as indented JSON."""
    return json.dumps(result.as_dict(), indent=2)


def permissions_to_json(permission_set: PermissionSet) -> str:
    return json.dumps({"role": permission_set.role.value, "permissions": permission_set.as_list()}, indent=2)
