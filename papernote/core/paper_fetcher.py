"""
Paper metadata retrieval - arXiv Atom API and Semantic Scholar Graph API
"""
from __future__ import annotations

import json
import logging
import re
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional

from .config import (
    ACL_ANTHOLOGY_URL,
    ARXIV_ABS_URL,
    ARXIV_API_URL,
    MSG_RETRIEVING_ARXIV,
    MSG_RETRIEVING_SEMANTIC_SCHOLAR,
    SEMANTIC_SCHOLAR_API_URL,
    SEMANTIC_SCHOLAR_FIELDS,
)
from .errors import MissingField, UnsupportedSource, UpstreamError
from .http import DEFAULT_USER_AGENT, force_https, http_get
from .models import ClassifiedUrl, PaperMetadata, SourceKind

logger = logging.getLogger(__name__)

UNDEFINED_TITLE = "undefined"


def compress_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


class MetadataSource(ABC):
    """Fetch ``PaperMetadata`` for a source-native identifier"""

    name = "source"
    retrieving_message = ""

    def __init__(self, timeout: Optional[float] = 30.0, user_agent: str = DEFAULT_USER_AGENT):
        self.timeout = timeout
        self.user_agent = user_agent

    @abstractmethod
    def api_url(self, identifier: str) -> str:
        ...

    @abstractmethod
    def parse(self, body: bytes, identifier: str) -> PaperMetadata:
        ...

    def fetch(self, identifier: str) -> PaperMetadata:
        """
        Fetch and parse metadata for one paper

        Args:
            identifier: Source-native identifier (arXiv ID, ACL ID, S2 paper ID)

        Returns:
            PaperMetadata built from the upstream response

        Raises:
            UpstreamError: On network errors, non-2xx statuses or malformed bodies
            MissingField: If a required field is absent from the response
        """
        url = self.api_url(identifier)
        logger.info("Fetching from %s API: %s", self.name, url)
        body = self._http_get(url)
        return self.parse(body, identifier)

    def _http_get(self, url: str) -> bytes:
        return http_get(url, timeout=self.timeout, user_agent=self.user_agent)


class ArxivSource(MetadataSource):
    """arXiv Atom query API"""

    name = "arXiv"
    retrieving_message = MSG_RETRIEVING_ARXIV

    def api_url(self, identifier: str) -> str:
        return f"{ARXIV_API_URL}{identifier}"

    def parse(self, body: bytes, identifier: str) -> PaperMetadata:
        try:
            root = ET.fromstring(body)
        except ET.ParseError as exc:
            raise UpstreamError("Failed to parse arXiv API response") from exc

        # Document order: the feed's own <title> comes first, the entry's second.
        # TODO: select the title under <entry> once the positional lookup is retired.
        titles = list(_iter_local(root, "title"))
        if len(titles) < 2:
            raise MissingField("title", self.name)
        title = compress_whitespace(titles[1].text or "") or UNDEFINED_TITLE

        summary = _first_local(root, "summary")
        abstract = summary.text if summary is not None else None

        authors: List[str] = []
        for author in _iter_local(root, "author"):
            name = _first_local(author, "name")
            if name is not None and name.text is not None:
                authors.append(name.text.strip())

        publication_date = None
        published = _first_local(root, "published")
        if published is not None and published.text:
            publication_date = published.text.strip().split("T")[0]

        return PaperMetadata(
            title=title,
            # Cites the API query URL for the entry.
            source_url=self.api_url(identifier),
            authors=tuple(authors),
            abstract=abstract,
            publication_date=publication_date,
            pdf_url=self._find_pdf_url(root),
        )

    @staticmethod
    def _find_pdf_url(root: ET.Element) -> Optional[str]:
        for link in _iter_local(root, "link"):
            if link.attrib.get("title") != "pdf":
                continue
            href = link.attrib.get("href")
            if href is None:
                return None
            # Some clients refuse plain http downloads.
            return force_https(href)
        return None


class SemanticScholarSource(MetadataSource):
    """
    Semantic Scholar Graph API

    The same endpoint serves native paper IDs and external ones; ``prefix``
    selects which (``""``, ``"arXiv:"`` or ``"ACL:"``).
    """

    name = "Semantic Scholar"
    retrieving_message = MSG_RETRIEVING_SEMANTIC_SCHOLAR

    def __init__(
        self,
        prefix: str = "",
        timeout: Optional[float] = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        super().__init__(timeout=timeout, user_agent=user_agent)
        self.prefix = prefix

    def api_url(self, identifier: str) -> str:
        return f"{SEMANTIC_SCHOLAR_API_URL}{self.prefix}{identifier}?fields={SEMANTIC_SCHOLAR_FIELDS}"

    def parse(self, body: bytes, identifier: str) -> PaperMetadata:
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise UpstreamError("Failed to parse Semantic Scholar API response") from exc

        if not isinstance(data, dict):
            raise UpstreamError("Unexpected Semantic Scholar API response")
        # Errors can arrive with a 200 status.
        if "error" in data:
            raise UpstreamError(f"Semantic Scholar API error: {data['error']}")
        if "title" not in data:
            raise MissingField("title", self.name)
        if not data.get("url"):
            raise MissingField("url", self.name)

        title = compress_whitespace(data["title"] or "") or UNDEFINED_TITLE
        authors = tuple(
            author["name"].strip()
            for author in data.get("authors") or []
            if isinstance(author, dict) and author.get("name")
        )

        return PaperMetadata(
            title=title,
            source_url=self._build_source_url(data),
            authors=authors,
            abstract=data.get("abstract"),
            venue=self._build_venue(data),
            publication_date=data.get("publicationDate"),
        )

    @staticmethod
    def _build_venue(data: Dict[str, Any]) -> Optional[str]:
        venue = (data.get("venue") or "").strip()
        if not venue:
            return None
        year = data.get("year")
        return f"{venue} {year}" if year is not None else venue

    @staticmethod
    def _build_source_url(data: Dict[str, Any]) -> str:
        lines = [data["url"]]
        external_ids = data.get("externalIds") or {}
        if external_ids.get("ArXiv"):
            lines.append(f"{ARXIV_ABS_URL}{external_ids['ArXiv']}")
        if external_ids.get("ACL"):
            lines.append(f"{ACL_ANTHOLOGY_URL}{external_ids['ACL']}")
        return "\n".join(lines)


def source_for(
    classified: ClassifiedUrl,
    timeout: Optional[float] = 30.0,
    user_agent: str = DEFAULT_USER_AGENT,
    arxiv_via_semantic_scholar: bool = False,
) -> MetadataSource:
    """
    Pick the metadata source for a classified URL

    Raises:
        UnsupportedSource: If the URL was classified as unsupported
    """
    kwargs = {"timeout": timeout, "user_agent": user_agent}
    if classified.kind is SourceKind.ARXIV:
        if arxiv_via_semantic_scholar:
            return SemanticScholarSource(prefix="arXiv:", **kwargs)
        return ArxivSource(**kwargs)
    if classified.kind is SourceKind.ACL_ANTHOLOGY:
        return SemanticScholarSource(prefix="ACL:", **kwargs)
    if classified.kind is SourceKind.SEMANTIC_SCHOLAR:
        return SemanticScholarSource(prefix="", **kwargs)
    raise UnsupportedSource(classified.url)


def _local_name(tag: Any) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _iter_local(element: ET.Element, name: str) -> Iterator[ET.Element]:
    for child in element.iter():
        if _local_name(child.tag) == name:
            yield child


def _first_local(element: ET.Element, name: str) -> Optional[ET.Element]:
    return next(_iter_local(element, name), None)
