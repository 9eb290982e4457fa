#!/usr/bin/env python3
"""Render Markdown notes to HTML with rating code spans shown as glyph bars."""

from __future__ import annotations

import argparse
import sys
import traceback
from pathlib import Path
from typing import Iterable

from rating_glyphs.markdown_ext import render_markdown
from rating_glyphs.renderer import RatingSettings
from rating_glyphs.settings import load_settings, resolve_settings_path

DEFAULT_OUTPUT_DIR = Path("out/html")


def iter_markdown_files(root: Path) -> Iterable[Path]:
    """
    Liefert alle Markdown-Dateien unterhalb von root (ohne versteckte Ordner wie .obsidian).
    """
    for path in sorted(root.rglob("*.md")):
        rel = path.relative_to(root)
        if any(part.startswith(".") for part in rel.parts):
            continue
        yield path


def render_note(source: Path, settings: RatingSettings) -> str:
    return render_markdown(source.read_text(encoding="utf-8"), settings)


def render_vault(vault_root: Path, output_dir: Path, settings: RatingSettings) -> int:
    """Render every note below vault_root into output_dir; returns the note count."""
    count = 0
    for note in iter_markdown_files(vault_root):
        target = output_dir / note.relative_to(vault_root).with_suffix(".html")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_note(note, settings), encoding="utf-8")
        count += 1
    return count


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render Markdown notes with rating code spans (e.g. `$-3/5`)."
    )
    parser.add_argument(
        "source",
        type=Path,
        help="Markdown note or vault directory",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"Output file (note) or directory (vault, default: {DEFAULT_OUTPUT_DIR}). "
        "A single note goes to stdout when omitted.",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Path to the settings JSON (overrides RATING_SETTINGS and VAULT_ROOT).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(resolve_settings_path(args.settings))

        if args.source.is_dir():
            output_dir = args.output or DEFAULT_OUTPUT_DIR
            count = render_vault(args.source, output_dir, settings)
            if count == 0:
                print(f"[render-ratings] Keine Notizen in {args.source} gefunden.", file=sys.stderr)
            else:
                print(f"[render-ratings] {count} note(s) rendered to {output_dir}")
            return 0

        rendered = render_note(args.source, settings)
        if args.output is None:
            sys.stdout.write(rendered + "\n")
        else:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(rendered, encoding="utf-8")
            print(f"[render-ratings] Rendered {args.source} to {args.output}", file=sys.stderr)
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
