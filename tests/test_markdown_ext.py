import markdown
import pytest

from rating_glyphs.markdown_ext import RatingExtension, render_markdown
from rating_glyphs.renderer import DEFAULT_SETTINGS, RatingSettings


def test_inline_rating_rendered():
    assert render_markdown("Taste: `$-4/5`\n") == "<p>Taste: ★★★★☆</p>"


def test_plain_inline_code_kept():
    assert render_markdown("`plain code`") == "<p><code>plain code</code></p>"


def test_custom_settings_with_markup_characters():
    cfg = RatingSettings(text_prefix="<r>", rating_divider="&", filled_stroke="+", empty_stroke="-")
    assert render_markdown("`<r>2&3`", cfg) == "<p>++-</p>"


def test_string_loading_with_extension_configs():
    html = markdown.markdown(
        "`$-1/3`",
        extensions=["rating_glyphs.markdown_ext"],
        extension_configs={
            "rating_glyphs.markdown_ext": {"filled_stroke": "●", "empty_stroke": "○"}
        },
    )
    assert html == "<p>●○○</p>"


def test_extension_round_trips_settings():
    cfg = RatingSettings(text_prefix="r:", rating_divider="|", filled_stroke="x", empty_stroke="")
    assert RatingExtension.from_settings(cfg).settings() == cfg
    assert RatingExtension().settings() == DEFAULT_SETTINGS


def test_code_block_is_replaced_too():
    html = render_markdown("Intro\n\n    $-2/3\n")
    assert "★★☆" in html
    assert "<code>" not in html


@pytest.mark.parametrize("text", ["`$-3/5` and `$-5/5`", "* `$-3/5`\n* `$-5/5`\n"])
def test_each_span_independent(text):
    html = render_markdown(text)
    assert "★★★☆☆" in html
    assert "★★★★★" in html
