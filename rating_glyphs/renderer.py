"""
Rating-Renderer: wandelt Rating-Codes in Glyph-Folgen um.

Eine Rating-Code-Spanne hat die Form ``<prefix><filled><divider><total>``,
z. B. ``$-3/5``, und wird zu ``★★★☆☆``.

Verhalten bei kaputten Eingaben:
  - Kein Prefix oder kein Divider hinter dem Prefix -> None (kein Treffer).
  - Nicht parsebare Zahl -> diese Seite liefert keine Glyphen.
  - filled > total -> nur gefüllte Glyphen, keine leeren.
  - Mehr als MAX_GLYPHS Glyphen pro Phase werden gekappt.

Es wird nie eine Exception geworfen.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

PREVIEW_FILLED = 3
PREVIEW_TOTAL = 5
# Obergrenze pro Glyph-Phase, größere Zahlen werden gekappt
MAX_GLYPHS = 1000

# parseInt-kompatibel: führende Ziffern zählen, der Rest wird ignoriert
_COUNT_RE = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class RatingSettings:
    """Konfiguration des Renderers (Wire-Namen siehe ``to_json``)."""

    text_prefix: str = "$-"
    rating_divider: str = "/"
    filled_stroke: str = "★"
    empty_stroke: str = "☆"

    def to_json(self) -> Dict[str, str]:
        return {
            "textPrefix": self.text_prefix,
            "ratingDivider": self.rating_divider,
            "filledStroke": self.filled_stroke,
            "emptyStroke": self.empty_stroke,
        }


DEFAULT_SETTINGS = RatingSettings()


def parse_count(segment: str) -> Optional[int]:
    """Parse the leading integer of ``segment``; ``None`` if there is none."""
    match = _COUNT_RE.match(segment)
    if match is None:
        return None
    return int(match.group(1))


def _repeat(glyph: str, count: Optional[int]) -> str:
    if count is None or count <= 0:
        return ""
    return glyph * min(count, MAX_GLYPHS)


def render_rating(text: str, settings: RatingSettings) -> Optional[str]:
    """Return the glyph string for a rating code, or ``None`` if ``text`` is none."""
    text = text.strip()
    prefix = settings.text_prefix
    if not text.startswith(prefix):
        return None

    divider_index = text.find(settings.rating_divider, len(prefix))
    if divider_index < 0:
        return None

    filled = parse_count(text[len(prefix):divider_index])
    total = parse_count(text[divider_index + len(settings.rating_divider):])

    empty = None
    if filled is not None and total is not None:
        empty = total - filled

    return _repeat(settings.filled_stroke, filled) + _repeat(settings.empty_stroke, empty)


def replace_rating(text: str, settings: RatingSettings) -> str:
    """Like ``render_rating``, but returns ``text`` unchanged when it does not match."""
    rendered = render_rating(text, settings)
    if rendered is None:
        return text
    return rendered


def preview(settings: RatingSettings) -> Tuple[str, str]:
    sample = (
        f"`{settings.text_prefix}{PREVIEW_FILLED}"
        f"{settings.rating_divider}{PREVIEW_TOTAL}`"
    )
    glyphs = settings.filled_stroke * PREVIEW_FILLED + settings.empty_stroke * (
        PREVIEW_TOTAL - PREVIEW_FILLED
    )
    return sample, glyphs


def describe_preview(settings: RatingSettings) -> str:
    sample, glyphs = preview(settings)
    return f"{sample} will appear as {glyphs} in reading mode"
