#!/usr/bin/env python3
"""
CredGate -- Password strength checks and role permission lookups.

Usage:
  python main.py check                       (prompts, input hidden)
  python main.py check 'Tr0ub4dor&Zx9!Qm'
  python main.py check 'pw one' 'pw two' --json
  python main.py --no-color check
  python main.py permissions admin
  python main.py permissions manager --json

Passing a password as an argument leaves it in shell history. Prefer the
prompt for real credentials.
"""

import argparse
import getpass
import json
import sys
from typing import Optional

from core.formatter import disable_color, permissions_to_json, print_permissions, print_report, to_json
from core.models import ScoreResult
from core.permissions import derive_permissions
from core.strength import evaluate


def _collect_passwords(args_passwords: list[str]) -> list[str]:
    """Return passwords from argv, or prompt for one when none were given."""
    if args_passwords:
        return list(args_passwords)
    try:
        return [getpass.getpass("Password: ")]
    except (EOFError, KeyboardInterrupt):
        print()
        return []


def _cmd_check(args: argparse.Namespace) -> int:
    passwords = _collect_passwords(args.passwords)
    if not passwords:
        print("  [!] No password given.")
        return 1

    results: list[ScoreResult] = [evaluate(pw) for pw in passwords]

    if args.json:
        if len(results) == 1:
            print(to_json(results[0]))
        else:
            print(json.dumps([r.as_dict() for r in results], indent=2))
    else:
        for i, result in enumerate(results, 1):
            title = "PASSWORD STRENGTH" if len(results) == 1 else f"PASSWORD {i} of {len(results)}"
            print_report(result, title=title)

    return 0


def _cmd_permissions(args: argparse.Namespace) -> int:
    permission_set = derive_permissions(args.role)
    if permission_set.role.value != args.role.strip().lower():
        print(f"  [!] Unknown role '{args.role}' -- showing {permission_set.role.value} permissions.", file=sys.stderr)

    if args.json:
        print(permissions_to_json(permission_set))
    else:
        print_permissions(permission_set)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="credgate",
        description="Password strength checks and role-based permission lookups.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py check
  python main.py check 'Password123!' --json
  python main.py permissions manager
        """,
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI color codes in terminal output",
    )
    sub = parser.add_subparsers(dest="command")

    check = sub.add_parser("check", help="Score one or more passwords")
    check.add_argument(
        "passwords",
        nargs="*",
        metavar="PASSWORD",
        help="Password(s) to score. Omit to be prompted with hidden input.",
    )
    check.add_argument("--json", action="store_true", help="Output structured JSON")
    check.set_defaults(handler=_cmd_check)

    perms = sub.add_parser("permissions", help="Show the permission set for a role")
    perms.add_argument("role", metavar="ROLE", help="admin, manager, or user")
    perms.add_argument("--json", action="store_true", help="Output structured JSON")
    perms.set_defaults(handler=_cmd_permissions)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        disable_color()

    if args.command is None:
        parser.print_help()
        return 0

    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
