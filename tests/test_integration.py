"""
Integration tests
"""
from pathlib import Path

import yaml

from papernote import ImportSession, ImportStatus, PaperNoteImporter
from papernote.core.config import (
    MSG_ERROR,
    MSG_FILE_EXISTS,
    MSG_RETRIEVING_ARXIV,
    MSG_RETRIEVING_SEMANTIC_SCHOLAR,
    MSG_UNSUPPORTED_URL,
    PaperNoteSettings,
)
from papernote.core.models import SessionState
from papernote.core.notifier import RecordingNotifier

from .conftest import ARXIV_FEED, PDF_BYTES, SEMANTIC_SCHOLAR_PAPER, make_response

ARXIV_NOTE = Path("Papers") / "Attention Is All You Need – A Study.md"


def _importer(tmp_path: Path, **overrides) -> PaperNoteImporter:
    values = dict(
        vault_root=tmp_path,
        folder_location="Papers",
        pdf_folder_location="Papers/_pdfs",
    )
    values.update(overrides)
    return PaperNoteImporter(settings=PaperNoteSettings(**values), notifier=RecordingNotifier())


def _frontmatter(path: Path) -> dict:
    return yaml.safe_load(path.read_text(encoding="utf-8").split("---\n")[1])


class TestPaperNoteImporter:
    """Test the full import pipeline"""

    def test_arxiv_import(self, tmp_path: Path, fake_requests):
        """arXiv URL creates note and PDF"""
        fake = fake_requests({
            "https://export.arxiv.org/api/query": make_response(200, ARXIV_FEED),
            "https://arxiv.org/pdf/": make_response(200, PDF_BYTES),
        })
        importer = _importer(tmp_path)
        result = importer.import_url("https://arxiv.org/abs/2101.00001")

        assert result.status is ImportStatus.CREATED
        assert result.url == "https://arxiv.org/abs/2101.00001"
        assert result.note_path == ARXIV_NOTE.as_posix()
        assert fake.calls[0] == "https://export.arxiv.org/api/query?id_list=2101.00001"
        assert fake.calls[1].startswith("https://")
        assert importer.notifier.messages == [MSG_RETRIEVING_ARXIV]

        frontmatter = _frontmatter(tmp_path / ARXIV_NOTE)
        assert frontmatter["alias"] == "Attention Is All You Need: A Study"
        assert frontmatter["authors"] == ["[[Ashish Vaswani]]", "[[Noam Shazeer]]"]
        assert frontmatter["date"] == "2020-12-31"
        assert frontmatter["artifacts"] == [
            "[[Papers/_pdfs/Attention Is All You Need – A Study.pdf|pdf]]"
        ]
        assert (tmp_path / "Papers" / "_pdfs" / "Attention Is All You Need – A Study.pdf").exists()

    def test_second_run_is_already_exists(self, tmp_path: Path, fake_requests):
        """Re-importing the same URL never rewrites the note"""
        fake_requests({
            "https://export.arxiv.org/api/query": make_response(200, ARXIV_FEED),
            "https://arxiv.org/pdf/": make_response(200, PDF_BYTES),
        })
        importer = _importer(tmp_path)
        first = importer.import_url("https://arxiv.org/abs/2101.00001")
        note_file = tmp_path / ARXIV_NOTE
        note_file.write_text("edited by hand", encoding="utf-8")

        second = importer.import_url("https://arxiv.org/abs/2101.00001")

        assert first.status is ImportStatus.CREATED
        assert second.status is ImportStatus.ALREADY_EXISTS
        assert second.note_path == first.note_path
        assert note_file.read_text(encoding="utf-8") == "edited by hand"
        assert importer.notifier.messages[-1] == MSG_FILE_EXISTS

    def test_semantic_scholar_import(self, tmp_path: Path, fake_requests):
        """Semantic Scholar URL yields venue and combined url lines"""
        fake = fake_requests({
            "https://api.semanticscholar.org/": make_response(200, SEMANTIC_SCHOLAR_PAPER),
        })
        importer = _importer(tmp_path)
        result = importer.import_url(
            "https://www.semanticscholar.org/paper/attention/204e3073870fae3d05bcbc2f6a8e263d9b72e776",
            discovered_via="reading group",
        )

        assert result.status is ImportStatus.CREATED
        assert result.pdf_path is None
        assert len(fake.calls) == 1
        assert "/paper/204e3073870fae3d05bcbc2f6a8e263d9b72e776?fields=" in fake.calls[0]
        assert importer.notifier.messages == [MSG_RETRIEVING_SEMANTIC_SCHOLAR]

        frontmatter = _frontmatter(tmp_path / "Papers" / "Attention is All you Need.md")
        assert frontmatter["url"].splitlines() == [
            SEMANTIC_SCHOLAR_PAPER["url"],
            "https://arxiv.org/abs/1706.03762",
        ]
        assert frontmatter["publication_venue"] == "Neural Information Processing Systems 2017"
        assert frontmatter["discovered_via"] == "reading group"
        assert "alias" not in frontmatter

    def test_acl_import_uses_prefix(self, tmp_path: Path, fake_requests):
        fake = fake_requests({
            "https://api.semanticscholar.org/": make_response(200, SEMANTIC_SCHOLAR_PAPER),
        })
        _importer(tmp_path).import_url("https://aclanthology.org/2020.acl-main.1/")
        assert fake.calls[0].startswith(
            "https://api.semanticscholar.org/graph/v1/paper/ACL:2020.acl-main.1?"
        )

    def test_unsupported_url(self, tmp_path: Path, fake_requests):
        """Unsupported URLs stop before any network call"""
        fake = fake_requests({})
        importer = _importer(tmp_path)
        result = importer.import_url("https://example.com/paper")
        assert result.status is ImportStatus.UNSUPPORTED
        assert fake.calls == []
        assert importer.notifier.messages == [MSG_UNSUPPORTED_URL + "https://example.com/paper"]

    def test_upstream_failure(self, tmp_path: Path, fake_requests):
        """HTTP errors produce one generic notice and no note"""
        fake_requests({"https://export.arxiv.org/": make_response(500, "oops")})
        importer = _importer(tmp_path)
        result = importer.import_url("https://arxiv.org/abs/2101.00001")
        assert result.status is ImportStatus.FAILED
        assert importer.notifier.messages[-1] == MSG_ERROR
        assert not (tmp_path / "Papers").exists()

    def test_unencodable_abstract_fails_cleanly(self, tmp_path: Path, fake_requests):
        """A note that cannot be encoded is reported and can be imported again later"""
        paper = dict(SEMANTIC_SCHOLAR_PAPER, abstract="bad \ud800 char")
        fake_requests({"https://api.semanticscholar.org/": make_response(200, paper)})
        importer = _importer(tmp_path)
        url = "https://www.semanticscholar.org/paper/x/204e3073"

        first = importer.import_url(url)
        assert first.status is ImportStatus.FAILED
        assert importer.notifier.messages[-1] == MSG_ERROR
        assert not (tmp_path / "Papers" / "Attention is All you Need.md").exists()

        fake_requests({"https://api.semanticscholar.org/": make_response(200, SEMANTIC_SCHOLAR_PAPER)})
        assert importer.import_url(url).status is ImportStatus.CREATED

    def test_semantic_scholar_error_body(self, tmp_path: Path, fake_requests):
        fake_requests({
            "https://api.semanticscholar.org/": make_response(200, {"error": "Paper not found"}),
        })
        importer = _importer(tmp_path)
        result = importer.import_url("https://www.semanticscholar.org/paper/x/deadbeef")
        assert result.status is ImportStatus.FAILED
        assert importer.notifier.messages[-1] == MSG_ERROR


class TestImportSession:
    """Test the per-session run guard"""

    def test_reentrant_submit_is_ignored(self, tmp_path: Path, fake_requests):
        """A trigger during a run is ignored"""
        fake_requests({
            "https://export.arxiv.org/api/query": make_response(200, ARXIV_FEED),
            "https://arxiv.org/pdf/": make_response(200, PDF_BYTES),
        })
        importer = _importer(tmp_path)
        session = ImportSession(importer)
        nested = []

        class ReentrantNotifier(RecordingNotifier):
            def notify(self, message):
                super().notify(message)
                if not nested:
                    nested.append(session.submit("https://arxiv.org/abs/2101.00001"))

        importer.notifier = importer.writer.notifier = ReentrantNotifier()
        result = session.submit("https://arxiv.org/abs/2101.00001")

        assert result.status is ImportStatus.CREATED
        assert nested[0].status is ImportStatus.IGNORED
        assert session.state is SessionState.IDLE

    def test_submit_normalizes_and_opens(self, tmp_path: Path, fake_requests):
        """Input is trimmed and lower-cased; the note is opened"""
        fake_requests({
            "https://export.arxiv.org/api/query": make_response(200, ARXIV_FEED),
        })
        opened = []
        session = ImportSession(_importer(tmp_path, download_pdfs=False), opener=opened.append)
        result = session.submit("  HTTPS://ARXIV.ORG/ABS/2101.00001  ")

        assert result.url == "https://arxiv.org/abs/2101.00001"
        assert opened == [str((tmp_path / ARXIV_NOTE).resolve())]

    def test_unsupported_does_not_open(self, tmp_path: Path):
        opened = []
        session = ImportSession(_importer(tmp_path), opener=opened.append)
        assert session.submit("https://example.com").status is ImportStatus.UNSUPPORTED
        assert opened == []

    def test_close_resets_guard(self, tmp_path: Path):
        session = ImportSession(_importer(tmp_path))
        session.state = SessionState.RUNNING
        assert session.submit("https://example.com").status is ImportStatus.IGNORED
        session.close()
        assert session.submit("https://example.com").status is ImportStatus.UNSUPPORTED
