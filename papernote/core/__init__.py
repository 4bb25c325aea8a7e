"""
papernote core

URL classification, metadata retrieval from arXiv and Semantic Scholar,
note naming, frontmatter rendering and idempotent persistence of notes
and cached PDFs.
"""

__author__ = "OSInsight"
__license__ = "MIT"

from .models import ImportResult, ImportStatus, PaperMetadata
from .converter import ImportSession, PaperNoteImporter

__all__ = [
    "ImportResult",
    "ImportSession",
    "ImportStatus",
    "PaperMetadata",
    "PaperNoteImporter",
]
