"""
Import pipeline: URL -> metadata -> note name -> note + PDF on disk
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from .artifact_writer import ArtifactWriter
from .config import MSG_ERROR, MSG_UNSUPPORTED_URL, PaperNoteSettings, get_settings
from .errors import UpstreamError
from .markdown_generator import MarkdownGenerator
from .models import ImportResult, ImportStatus, SessionState
from .note_name import build_note_target
from .notifier import ConsoleNotifier, Notifier
from .paper_fetcher import source_for
from .url_classifier import classify_url
from .vault import Vault

logger = logging.getLogger(__name__)


class PaperNoteImporter:
    """Main class for turning paper URLs into notes"""

    def __init__(
        self,
        settings: Optional[PaperNoteSettings] = None,
        notifier: Optional[Notifier] = None,
        vault: Optional[Vault] = None,
        generator: Optional[MarkdownGenerator] = None,
    ):
        """
        Initialize importer

        Args:
            settings: Folder, PDF and HTTP settings (environment by default)
            notifier: Sink for user-facing notices (stderr by default)
            vault: Store notes are written to (``settings.vault_root`` by default)
            generator: Note renderer
        """
        self.settings = settings or get_settings()
        self.notifier = notifier or ConsoleNotifier()
        self.vault = vault or Vault(self.settings.vault_root)
        self.writer = ArtifactWriter(
            vault=self.vault,
            notifier=self.notifier,
            generator=generator or MarkdownGenerator(),
            download_pdfs=self.settings.download_pdfs,
            pdf_folder=self.settings.pdf_folder_location,
            timeout=self.settings.timeout,
            user_agent=self.settings.user_agent,
        )

    def import_url(self, url: str, discovered_via: Optional[str] = None) -> ImportResult:
        """
        Create a paper note for ``url``

        Upstream and persistence failures never escape: they are logged,
        reported with one generic notice and returned as ``FAILED``.

        Args:
            url: arXiv, ACL Anthology or Semantic Scholar URL
            discovered_via: Optional provenance recorded in the frontmatter

        Returns:
            ImportResult describing what happened
        """
        classified = classify_url(url)
        if not classified.is_supported:
            self.notifier.notify(MSG_UNSUPPORTED_URL + url)
            return ImportResult(status=ImportStatus.UNSUPPORTED, url=url)

        source = source_for(
            classified,
            timeout=self.settings.timeout,
            user_agent=self.settings.user_agent,
            arxiv_via_semantic_scholar=self.settings.arxiv_via_semantic_scholar,
        )
        self.notifier.notify(source.retrieving_message)

        try:
            metadata = source.fetch(classified.identifier)
            target = build_note_target(metadata.title, self.settings.folder_location)
            result = self.writer.write(target, metadata, discovered_via=discovered_via)
        except (UpstreamError, OSError, UnicodeError):
            logger.exception("Failed to import %s", url)
            self.notifier.notify(MSG_ERROR)
            return ImportResult(status=ImportStatus.FAILED, url=url)

        result.url = url
        return result

    def resolve_path(self, note_path: str) -> str:
        """Absolute filesystem path of a vault-relative note path"""
        return str(self.vault.resolve(note_path).resolve())


class ImportSession:
    """
    One interactive import session

    Submissions made while a run is in flight are ignored, so a repeated
    trigger cannot start a second import from the same session.
    """

    def __init__(
        self,
        importer: PaperNoteImporter,
        opener: Optional[Callable[[str], None]] = None,
    ):
        self.importer = importer
        self.opener = opener
        self.state = SessionState.IDLE

    def submit(self, url: str, discovered_via: Optional[str] = None) -> ImportResult:
        url = (url or "").strip().lower()
        if self.state is SessionState.RUNNING:
            logger.debug("Import already running, ignoring %s", url)
            return ImportResult(status=ImportStatus.IGNORED, url=url)

        self.state = SessionState.RUNNING
        try:
            result = self.importer.import_url(url, discovered_via=discovered_via)
        finally:
            self.state = SessionState.IDLE

        if result.should_open and self.opener is not None:
            self.opener(self.importer.resolve_path(result.note_path))
        return result

    def close(self) -> None:
        self.state = SessionState.IDLE
