"""
Classify paper URLs by source and extract the source-native identifier
"""
from __future__ import annotations

from typing import Tuple
from urllib.parse import urlsplit

from .models import ClassifiedUrl, SourceKind

# Checked in order, first match wins.
HOST_MARKERS: Tuple[Tuple[str, SourceKind], ...] = (
    ("arxiv", SourceKind.ARXIV),
    ("aclanthology", SourceKind.ACL_ANTHOLOGY),
    ("semanticscholar", SourceKind.SEMANTIC_SCHOLAR),
)


def get_identifier_from_url(url: str) -> str:
    """
    Take the last path segment of a URL as the paper identifier

    A single trailing slash is ignored and a ``.pdf`` suffix is dropped, so
    ``https://arxiv.org/pdf/2101.00001.pdf`` yields ``2101.00001``.
    """
    if url.endswith("/"):
        url = url[:-1]
    segment = url.split("/")[-1]
    if segment.endswith(".pdf"):
        return segment[: -len(".pdf")]
    return segment


def _host_of(url: str) -> str:
    value = url if "://" in url else f"//{url}"
    try:
        return (urlsplit(value).hostname or "").lower()
    except ValueError:
        return ""


def classify_url(url: str) -> ClassifiedUrl:
    """
    Decide which source a URL belongs to

    Returns a ``ClassifiedUrl`` with ``SourceKind.UNSUPPORTED`` (and no
    identifier) for anything that is not an arXiv, ACL Anthology or
    Semantic Scholar link.
    """
    host = _host_of((url or "").strip())
    if host:
        for marker, kind in HOST_MARKERS:
            if marker in host:
                return ClassifiedUrl(
                    kind=kind,
                    url=url,
                    identifier=get_identifier_from_url(url.strip()),
                )
    return ClassifiedUrl(kind=SourceKind.UNSUPPORTED, url=url or "")
