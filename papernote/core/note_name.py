"""
Derive filesystem-safe note names from paper titles
"""
from __future__ import annotations

import re

from .models import NoteTarget


def build_note_name(title: str) -> str:
    """
    Turn a paper title into a note basename

    Slashes and backslashes become underscores, ``"Foo: bar"`` becomes
    ``"Foo – bar"`` and any remaining colon becomes a hyphen. Nothing else
    is touched.
    """
    name = re.sub(r"[/\\]", "_", title)
    name = name.replace(": ", " – ")
    return name.replace(":", "-")


def join_path(folder: str, filename: str) -> str:
    """Join a vault-relative folder and a filename with ``/``"""
    folder = (folder or "").strip("/")
    return f"{folder}/{filename}" if folder else filename


def build_note_target(title: str, folder: str) -> NoteTarget:
    """Compute basename, note path and alias for a title"""
    basename = build_note_name(title)
    return NoteTarget(
        basename=basename,
        note_path=join_path(folder, f"{basename}.md"),
        alias=title if basename != title else None,
    )


def pdf_path_for(basename: str, pdf_folder: str) -> str:
    return join_path(pdf_folder, f"{basename}.pdf")
