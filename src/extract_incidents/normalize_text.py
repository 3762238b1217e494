"""Turn report markup into line-oriented plain text."""

from __future__ import annotations

from lxml import etree
from lxml import html as lxml_html

# Elements whose end starts a new line in the rendered text.
BLOCK_TAGS = {
    "address", "article", "blockquote", "dd", "div", "dl", "dt", "footer",
    "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "ol", "p",
    "pre", "section", "table", "tr", "ul",
}
# Table cells sit on their row's line, so "Location:" and its value stay together.
CELL_TAGS = {"td", "th"}


def html_to_text(body: str | None) -> str:
    """Strip markup from `body`, keeping one line per <br> or block element.

    Entities are decoded and every line is stripped. Blank lines are kept so
    the line structure of the source survives.
    """
    if not body or not body.strip():
        return ""

    try:
        root = lxml_html.fragment_fromstring(body, create_parent="div")
    except etree.ParserError:
        return ""

    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        if element.tag == "br" or element.tag in BLOCK_TAGS:
            element.tail = "\n" + (element.tail or "")
        elif element.tag in CELL_TAGS:
            element.tail = " " + (element.tail or "")

    text = root.text_content()
    return "\n".join(line.strip() for line in text.splitlines()).strip()
