"""HTML-to-text conversion for message previews.

Most recruiting platforms send HTML-only mail, so thread previews are
built from the HTML body when no plain-text body is present.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from jobtrail.observability.logging import get_logger

logger = get_logger(__name__)


def html_to_text(html: str | None) -> str:
    """Convert an HTML email body to plain text.

    Args:
        html: Raw HTML string from email body.

    Returns:
        Plain text extracted from the HTML.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(["script", "style", "head"]):
        tag.decompose()

    text = soup.get_text(separator="\n")

    # Collapse whitespace: multiple blank lines -> single, strip each line
    lines = [line.strip() for line in text.splitlines()]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def preview_text(html_body: str | None, body: str | None, max_length: int = 200) -> str:
    """Single-line preview from whichever body is available, HTML first."""
    source = html_to_text(html_body) if html_body else (body or "")
    if html_body and not source and body:
        logger.debug("HTML body produced no text, falling back to plain body")
        source = body
    collapsed = " ".join(source.split())
    if len(collapsed) > max_length:
        return collapsed[: max_length - 3].rstrip() + "..."
    return collapsed
