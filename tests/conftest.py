"""
Shared fixtures: canned upstream responses and a fake ``requests.get``
"""
import json
from typing import Dict, List, Union
from unittest.mock import MagicMock

import pytest

ARXIV_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:arxiv="http://arxiv.org/schemas/atom">
  <link href="http://arxiv.org/api/query?id_list=2101.00001" rel="self" type="application/atom+xml"/>
  <title type="html">ArXiv Query: search_query=&amp;id_list=2101.00001</title>
  <id>http://arxiv.org/api/example</id>
  <updated>2021-01-05T00:00:00-05:00</updated>
  <entry>
    <id>http://arxiv.org/abs/2101.00001v1</id>
    <updated>2021-01-02T10:00:00Z</updated>
    <published>2020-12-31T18:59:59Z</published>
    <title>Attention Is All
      You Need: A Study</title>
    <summary>  We propose a new
  architecture.
</summary>
    <author>
      <name>Ashish Vaswani</name>
    </author>
    <author>
      <name> Noam Shazeer </name>
      <arxiv:affiliation>Google</arxiv:affiliation>
    </author>
    <link href="http://arxiv.org/abs/2101.00001v1" rel="alternate" type="text/html"/>
    <link title="pdf" href="http://arxiv.org/pdf/2101.00001v1" rel="related" type="application/pdf"/>
    <arxiv:primary_category term="cs.CL" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
</feed>
"""

ARXIV_EMPTY_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title type="html">ArXiv Query: id_list=9999.99999</title>
  <id>http://arxiv.org/api/example</id>
</feed>
"""

SEMANTIC_SCHOLAR_PAPER = {
    "paperId": "204e3073870fae3d05bcbc2f6a8e263d9b72e776",
    "url": "https://www.semanticscholar.org/paper/204e3073870fae3d05bcbc2f6a8e263d9b72e776",
    "title": "Attention is  All you\nNeed",
    "abstract": "The dominant sequence transduction models...",
    "venue": "Neural Information  Processing Systems",
    "year": 2017,
    "publicationDate": "2017-06-12",
    "externalIds": {"ArXiv": "1706.03762", "DBLP": "conf/nips/VaswaniSPUJGKP17"},
    "authors": [
        {"authorId": "40348417", "name": "Ashish Vaswani"},
        {"authorId": "1846258", "name": "Noam Shazeer"},
    ],
}

PDF_BYTES = b"%PDF-1.4\n%fake\n"


def make_response(status: int = 200, body: Union[bytes, str, dict] = b"") -> MagicMock:
    """Return a mock ``requests.Response``"""
    if isinstance(body, dict):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    response = MagicMock()
    response.status_code = status
    response.content = body
    response.headers = {}
    return response


class FakeRequests:
    """Route ``requests.get`` calls to canned responses by URL prefix"""

    def __init__(self, routes: Dict[str, MagicMock]):
        self.routes = routes
        self.calls: List[str] = []

    def __call__(self, url, headers=None, timeout=None):
        self.calls.append(url)
        for prefix, response in self.routes.items():
            if url.startswith(prefix):
                return response
        raise AssertionError(f"Unexpected request: {url}")


@pytest.fixture
def fake_requests(monkeypatch):
    """Install a ``FakeRequests`` router; call it with the routes to serve"""

    def install(routes: Dict[str, MagicMock]) -> FakeRequests:
        fake = FakeRequests(routes)
        monkeypatch.setattr("papernote.core.http.requests.get", fake)
        return fake

    return install
