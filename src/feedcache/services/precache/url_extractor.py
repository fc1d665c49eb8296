"""
Image URL extraction from article markup.

Best-effort: malformed markup never raises, it just yields whatever image
references could be recovered.
"""

from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


def _srcset_urls(srcset: str) -> List[str]:
    """Split a ``srcset`` value into its candidate URLs.

    Each candidate is ``URL [descriptor]``; candidates are comma separated.
    """
    urls = []
    for candidate in srcset.split(","):
        parts = candidate.strip().split()
        if parts:
            urls.append(parts[0])
    return urls


def _is_fetchable(url: str) -> bool:
    return bool(url) and not url.lower().startswith("data:")


def find_all_image_urls_in_html(html: str | None) -> List[str]:
    """Return every image URL referenced by ``<img>``-like elements in ``html``.

    Collects ``src`` and ``srcset`` of ``<img>`` elements and ``srcset`` of
    ``<source>`` elements inside ``<picture>``. Inline ``data:`` URIs are
    skipped. URLs are returned verbatim (surrounding whitespace removed),
    deduplicated, in document order.

    Parameters
    ----------
    html : str | None
        Raw article markup.

    Returns
    -------
    List[str]
        Image URLs; empty when none are found or the input is empty.
    """
    if not html:
        return []

    found: dict[str, None] = {}
    try:
        soup = BeautifulSoup(html, "html.parser")
        for element in soup.find_all(["img", "source"]):
            if not isinstance(element, Tag):
                continue
            candidates: List[str] = []
            if element.name == "img":
                src = element.get("src")
                if isinstance(src, str):
                    candidates.append(src.strip())
            elif element.find_parent("picture") is None:
                continue
            srcset = element.get("srcset")
            if isinstance(srcset, str):
                candidates.extend(_srcset_urls(srcset))
            for url in candidates:
                if _is_fetchable(url):
                    found.setdefault(url, None)
    except Exception:  # noqa: BLE001 - extraction is best-effort
        logger.debug("Image extraction stopped on malformed markup", exc_info=True)

    return list(found)
