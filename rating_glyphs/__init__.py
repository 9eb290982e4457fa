"""Render rating code spans (`$-3/5`) in Markdown notes as glyph bars."""

from rating_glyphs.renderer import (
    DEFAULT_SETTINGS,
    RatingSettings,
    render_rating,
    replace_rating,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "RatingSettings",
    "render_rating",
    "replace_rating",
]
