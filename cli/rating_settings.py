#!/usr/bin/env python3
"""Show or change the rating settings and print the live preview."""

import argparse
import sys
import traceback
from pathlib import Path
from typing import Dict

from rating_glyphs.settings import (
    SETTING_FIELDS,
    SettingsController,
    resolve_settings_path,
)


def show(controller: SettingsController) -> None:
    print(f"[rating-settings] {controller.store_path}")
    for field in SETTING_FIELDS:
        value = getattr(controller.settings, field.key)
        print(f"{field.name}: {value!r}")
        print(f"    {field.description}")
    print(controller.preview())


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Configure the rating renderer.")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Path to the settings JSON (overrides RATING_SETTINGS and VAULT_ROOT).",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Print current settings and preview")

    set_parser = sub.add_parser("set", help="Change one or more settings")
    for field in SETTING_FIELDS:
        set_parser.add_argument(
            "--" + field.key.replace("_", "-"),
            dest=field.key,
            default=None,
            metavar=field.placeholder or "TEXT",
            help=field.description,
        )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        controller = SettingsController(resolve_settings_path(args.settings))

        if args.command == "show":
            show(controller)
            return 0

        changes: Dict[str, str] = {
            field.key: getattr(args, field.key)
            for field in SETTING_FIELDS
            if getattr(args, field.key) is not None
        }
        if not changes:
            print("[rating-settings] Nothing to change.", file=sys.stderr)
            return 0

        print(controller.update(**changes))
        print(f"[rating-settings] Saved to {controller.store_path}", file=sys.stderr)
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
