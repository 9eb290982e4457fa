"""Replace rating code spans inside a rendered (X)HTML fragment."""

from __future__ import annotations

import html
import xml.etree.ElementTree as etree
from typing import Dict, List, Set

from rating_glyphs.renderer import RatingSettings, render_rating

FRAGMENT_WRAPPER = "div"


def _splice_text(parent: etree.Element, element: etree.Element, text: str) -> None:
    """Remove ``element`` from ``parent`` and put ``text`` plus its tail in its place."""
    text = text + (element.tail or "")
    index = list(parent).index(element)
    if index == 0:
        parent.text = (parent.text or "") + text
    else:
        previous = parent[index - 1]
        previous.tail = (previous.tail or "") + text
    parent.remove(element)


def _inside_removed(
    element: etree.Element,
    parents: Dict[etree.Element, etree.Element],
    removed: Set[etree.Element],
) -> bool:
    # code in code: der äußere Treffer hat den inneren schon mitgenommen
    node = parents.get(element)
    while node is not None:
        if node in removed:
            return True
        node = parents.get(node)
    return False


def replace_rating_spans(
    root: etree.Element, settings: RatingSettings, *, unescape: bool = False
) -> int:
    """
    Ersetzt alle passenden ``code``-Elemente unterhalb von root durch Glyph-Text.

    Nicht passende Elemente bleiben unverändert. Jeder Treffer wird für sich
    behandelt, in Dokumentreihenfolge. Liefert die Anzahl der Ersetzungen.
    """
    parents: Dict[etree.Element, etree.Element] = {
        child: parent for parent in root.iter() for child in parent
    }
    # iter() vorab einsammeln, der Baum wird beim Ersetzen verändert
    candidates: List[etree.Element] = [el for el in root.iter("code") if el is not root]

    replaced = 0
    removed: Set[etree.Element] = set()
    for element in candidates:
        if _inside_removed(element, parents, removed):
            continue
        text = "".join(element.itertext())
        if unescape:
            text = html.unescape(text)
        rendered = render_rating(text, settings)
        if rendered is None:
            continue
        _splice_text(parents[element], element, rendered)
        removed.add(element)
        replaced += 1
    return replaced


def render_fragment_html(fragment: str, settings: RatingSettings) -> str:
    """Run the rating scan over a well-formed XHTML fragment string."""
    root = etree.fromstring(f"<{FRAGMENT_WRAPPER}>{fragment}</{FRAGMENT_WRAPPER}>")
    replace_rating_spans(root, settings)
    serialised = etree.tostring(root, encoding="unicode")
    start_tag, end_tag = f"<{FRAGMENT_WRAPPER}>", f"</{FRAGMENT_WRAPPER}>"
    if not serialised.startswith(start_tag):
        # leerer Wrapper wird als <div /> serialisiert
        return ""
    return serialised[len(start_tag):-len(end_tag)]
