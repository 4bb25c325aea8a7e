"""
CLI interface for papernote
"""
import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .config import MSG_NOTE_CREATED, PaperNoteSettings
from .converter import ImportSession, PaperNoteImporter
from .models import ImportStatus


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser"""
    parser = argparse.ArgumentParser(
        description="Create paper notes from arXiv, ACL Anthology or Semantic Scholar URLs"
    )

    parser.add_argument(
        "urls",
        nargs="*",
        help="Paper URLs (read one per line from stdin when omitted)"
    )

    parser.add_argument(
        "--vault",
        help="Directory note and PDF folders are relative to"
    )

    parser.add_argument(
        "--folder",
        help="Folder to create paper notes in"
    )

    parser.add_argument(
        "--pdf-folder",
        help="Folder to download PDFs to"
    )

    parser.add_argument(
        "--no-pdf",
        action="store_true",
        help="Do not download PDFs"
    )

    parser.add_argument(
        "--discovered-via",
        help="Where the paper was found (recorded in the note)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help="HTTP timeout in seconds"
    )

    parser.add_argument(
        "--semantic-scholar-for-arxiv",
        action="store_true",
        help="Look up arXiv papers through Semantic Scholar (adds venue, no PDF)"
    )

    parser.add_argument(
        "--open-with",
        metavar="CMD",
        help="Command used to open created or existing notes"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )

    return parser


def build_settings(args: argparse.Namespace) -> PaperNoteSettings:
    overrides = {}
    if args.vault is not None:
        overrides["vault_root"] = Path(args.vault)
    if args.folder is not None:
        overrides["folder_location"] = args.folder
    if args.pdf_folder is not None:
        overrides["pdf_folder_location"] = args.pdf_folder
    if args.no_pdf:
        overrides["download_pdfs"] = False
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.semantic_scholar_for_arxiv:
        overrides["arxiv_via_semantic_scholar"] = True
    return PaperNoteSettings(**overrides)


def make_opener(command: Optional[str]) -> Callable[[str], None]:
    def open_note(path: str) -> None:
        if command:
            subprocess.run([command, path], check=False)
        else:
            print(f"Opening: {path}")

    return open_note


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    urls = args.urls or [line.strip() for line in sys.stdin if line.strip()]
    if not urls:
        parser.error("no URL given")

    importer = PaperNoteImporter(settings=build_settings(args))
    session = ImportSession(importer, opener=make_opener(args.open_with))

    failed = False
    for url in urls:
        result = session.submit(url, discovered_via=args.discovered_via)
        if result.status is ImportStatus.CREATED:
            print(MSG_NOTE_CREATED + result.note_path)
        if not result.ok:
            failed = True

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
