"""
Settings and user-facing message constants
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .http import DEFAULT_USER_AGENT

ARXIV_API_URL = "https://export.arxiv.org/api/query?id_list="
SEMANTIC_SCHOLAR_API_URL = "https://api.semanticscholar.org/graph/v1/paper/"
SEMANTIC_SCHOLAR_FIELDS = "authors,title,abstract,url,venue,year,publicationDate,externalIds"
ARXIV_ABS_URL = "https://arxiv.org/abs/"
ACL_ANTHOLOGY_URL = "https://aclanthology.org/"

MSG_ERROR = "Something went wrong. Run with --verbose if the error persists."
MSG_UNSUPPORTED_URL = "This URL is not supported. You tried to enter: "
MSG_FILE_EXISTS = "Unable to create note. File already exists. Opening existing file."
MSG_RETRIEVING_ARXIV = "Retrieving paper information from arXiv API."
MSG_RETRIEVING_SEMANTIC_SCHOLAR = "Retrieving paper information from Semantic Scholar API."
MSG_REUSING_PDF = "Reusing existing PDF: "
MSG_NOTE_CREATED = "Created paper note: "


class PaperNoteSettings(BaseSettings):
    """Settings for creating paper notes, read from PAPERNOTE_* variables"""

    model_config = SettingsConfigDict(
        env_prefix="PAPERNOTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    vault_root: Path = Field(default=Path("."), description="Directory note paths are relative to")
    folder_location: str = Field(default="Personal", description="Folder to create paper notes in")
    download_pdfs: bool = Field(default=True, description="Whether to download PDFs")
    pdf_folder_location: str = Field(default="Personal/_pdfs", description="Folder to download PDFs to")
    timeout: Optional[float] = Field(default=30.0, description="HTTP timeout in seconds, None to wait forever")
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    arxiv_via_semantic_scholar: bool = Field(
        default=False,
        description="Resolve arXiv URLs through the Semantic Scholar Graph API",
    )


@lru_cache(maxsize=1)
def get_settings() -> PaperNoteSettings:
    return PaperNoteSettings()
