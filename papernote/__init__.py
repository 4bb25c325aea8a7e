"""
papernote - Turn arXiv, ACL Anthology and Semantic Scholar links into paper notes

This is the main public API module.
"""

__version__ = "0.1.0"

from .core.models import ImportResult, ImportStatus, PaperMetadata
from .core.converter import ImportSession, PaperNoteImporter

__all__ = [
    "ImportResult",
    "ImportSession",
    "ImportStatus",
    "PaperMetadata",
    "PaperNoteImporter",
]
