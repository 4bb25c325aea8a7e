"""
Data models for papernote
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class SourceKind(str, Enum):
    """Upstream source a paper URL belongs to"""
    ARXIV = "arxiv"
    ACL_ANTHOLOGY = "aclanthology"
    SEMANTIC_SCHOLAR = "semanticscholar"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ClassifiedUrl:
    """Result of URL classification"""
    kind: SourceKind
    url: str = ""
    identifier: Optional[str] = None

    @property
    def is_supported(self) -> bool:
        return self.kind is not SourceKind.UNSUPPORTED


@dataclass(frozen=True)
class PaperMetadata:
    """Normalized paper metadata produced by a metadata source"""
    title: str
    source_url: str
    authors: Tuple[str, ...] = ()
    abstract: Optional[str] = None
    venue: Optional[str] = None
    publication_date: Optional[str] = None
    pdf_url: Optional[str] = None

    def __str__(self):
        return f"{self.title} by {', '.join(self.authors) if self.authors else 'Unknown'}"


@dataclass(frozen=True)
class NoteTarget:
    """Where a note for a given title lives"""
    basename: str
    note_path: str
    alias: Optional[str] = None


@dataclass
class NoteDocument:
    """Rendered note: frontmatter mapping plus the full markdown text"""
    frontmatter: Dict[str, Any]
    text: str

    def __str__(self):
        return self.text


class ImportStatus(str, Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    UNSUPPORTED = "unsupported"
    FAILED = "failed"
    IGNORED = "ignored"


@dataclass
class ImportResult:
    """Outcome of a single import run"""
    status: ImportStatus
    url: str
    note_path: Optional[str] = None
    pdf_path: Optional[str] = None
    metadata: Optional[PaperMetadata] = None

    @property
    def should_open(self) -> bool:
        """Whether the caller is asked to open ``note_path``"""
        return self.status in (ImportStatus.CREATED, ImportStatus.ALREADY_EXISTS)

    @property
    def ok(self) -> bool:
        return self.should_open


class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class HttpResponse:
    """Minimal response returned by the HTTP fetch primitive"""
    status: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
