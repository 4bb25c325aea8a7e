"""
Persist notes and cached PDFs without overwriting anything
"""
from __future__ import annotations

import logging
from typing import Optional

from .config import MSG_FILE_EXISTS, MSG_REUSING_PDF
from .http import DEFAULT_USER_AGENT, force_https, http_get
from .markdown_generator import MarkdownGenerator
from .models import ImportResult, ImportStatus, NoteTarget, PaperMetadata
from .note_name import pdf_path_for
from .notifier import Notifier
from .vault import Vault

logger = logging.getLogger(__name__)


class ArtifactWriter:
    """Write a paper note, and optionally its PDF, into a vault"""

    def __init__(
        self,
        vault: Vault,
        notifier: Notifier,
        generator: Optional[MarkdownGenerator] = None,
        download_pdfs: bool = True,
        pdf_folder: str = "",
        timeout: Optional[float] = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.vault = vault
        self.notifier = notifier
        self.generator = generator or MarkdownGenerator()
        self.download_pdfs = download_pdfs
        self.pdf_folder = pdf_folder
        self.timeout = timeout
        self.user_agent = user_agent

    def write(
        self,
        target: NoteTarget,
        metadata: PaperMetadata,
        discovered_via: Optional[str] = None,
    ) -> ImportResult:
        """
        Create the note for ``target`` unless one already exists

        An existing note is never overwritten; the result then carries
        ``ALREADY_EXISTS`` and the existing path so the caller can open it.
        A PDF downloaded before a failed note write is left in place.

        Returns:
            ImportResult with status CREATED or ALREADY_EXISTS
        """
        if self.vault.exists(target.note_path):
            return self._already_exists(target, metadata)

        pdf_path = None
        if self.download_pdfs:
            if metadata.pdf_url:
                pdf_path = self.try_fetch_pdf(target.basename, metadata.pdf_url)
            else:
                logger.info("Skipping PDF download; no PDF URL found.")

        document = self.generator.build_note(
            metadata,
            target,
            pdf_path=pdf_path,
            discovered_via=discovered_via,
        )
        try:
            self.vault.create_text(target.note_path, document.text)
        except FileExistsError:
            # Another run created the note after our existence check.
            return self._already_exists(target, metadata, pdf_path=pdf_path)

        logger.info("Created note %s", target.note_path)
        return ImportResult(
            status=ImportStatus.CREATED,
            url=metadata.source_url,
            note_path=target.note_path,
            pdf_path=pdf_path,
            metadata=metadata,
        )

    def try_fetch_pdf(self, basename: str, pdf_url: str) -> str:
        """
        Return the cached PDF path for ``basename``, downloading it if absent

        An existing file at the cache path is reused as-is, with no network
        call.

        Raises:
            UpstreamError: If the download fails
        """
        pdf_path = pdf_path_for(basename, self.pdf_folder)
        if self.vault.exists(pdf_path):
            self.notifier.notify(MSG_REUSING_PDF + pdf_path)
            return pdf_path

        pdf_url = force_https(pdf_url)
        logger.info("Downloading PDF from %s", pdf_url)
        data = http_get(pdf_url, timeout=self.timeout, user_agent=self.user_agent)
        self.vault.create_binary(pdf_path, data)
        return pdf_path

    def _already_exists(
        self,
        target: NoteTarget,
        metadata: PaperMetadata,
        pdf_path: Optional[str] = None,
    ) -> ImportResult:
        self.notifier.notify(MSG_FILE_EXISTS)
        return ImportResult(
            status=ImportStatus.ALREADY_EXISTS,
            url=metadata.source_url,
            note_path=target.note_path,
            pdf_path=pdf_path,
            metadata=metadata,
        )
