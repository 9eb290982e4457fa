"""
python-markdown extension that renders rating code spans as glyph bars.

Usage::

    markdown.markdown(text, extensions=["rating_glyphs.markdown_ext"])
    markdown.markdown(text, extensions=[RatingExtension(filled_stroke="●")])
"""

from __future__ import annotations

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from rating_glyphs.fragment import replace_rating_spans
from rating_glyphs.renderer import DEFAULT_SETTINGS, RatingSettings

# after "inline" (20), which creates the <code> elements
TREEPROCESSOR_PRIORITY = 15


class RatingTreeprocessor(Treeprocessor):
    def __init__(self, md: markdown.Markdown, settings: RatingSettings):
        super().__init__(md)
        self.settings = settings
        self.replaced = 0

    def run(self, root):
        # Inline-Code liegt hier bereits entity-escaped vor
        self.replaced = replace_rating_spans(root, self.settings, unescape=True)


class RatingExtension(Extension):
    def __init__(self, **kwargs):
        self.config = {
            "text_prefix": [DEFAULT_SETTINGS.text_prefix, "Text before the rating"],
            "rating_divider": [
                DEFAULT_SETTINGS.rating_divider,
                "Text between rating and total",
            ],
            "filled_stroke": [DEFAULT_SETTINGS.filled_stroke, "Filled rating item"],
            "empty_stroke": [DEFAULT_SETTINGS.empty_stroke, "Empty rating item"],
        }
        super().__init__(**kwargs)

    @classmethod
    def from_settings(cls, settings: RatingSettings) -> "RatingExtension":
        return cls(
            text_prefix=settings.text_prefix,
            rating_divider=settings.rating_divider,
            filled_stroke=settings.filled_stroke,
            empty_stroke=settings.empty_stroke,
        )

    def settings(self) -> RatingSettings:
        return RatingSettings(**self.getConfigs())

    def extendMarkdown(self, md):
        md.treeprocessors.register(
            RatingTreeprocessor(md, self.settings()),
            "rating_glyphs",
            TREEPROCESSOR_PRIORITY,
        )


def makeExtension(**kwargs):
    return RatingExtension(**kwargs)


def render_markdown(text: str, settings: RatingSettings = DEFAULT_SETTINGS) -> str:
    """Render a Markdown note to HTML with rating spans replaced."""
    return markdown.markdown(text, extensions=[RatingExtension.from_settings(settings)])
