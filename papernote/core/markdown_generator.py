"""
Markdown generation module - frontmatter and body of a paper note
"""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

import yaml

from .models import NoteDocument, NoteTarget, PaperMetadata

NOTE_TEMPLATE = """---
{frontmatter}
---
# Abstract
{abstract}

- - -

# Notes
"""


class _FrontmatterDumper(yaml.SafeDumper):
    """Indent block sequences under their key and keep multi-line strings readable"""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_FrontmatterDumper.add_representer(str, _represent_str)


def dump_frontmatter(frontmatter: Dict[str, Any]) -> str:
    """Dump a mapping as YAML, keeping key order and never wrapping lines"""
    return yaml.dump(
        frontmatter,
        Dumper=_FrontmatterDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    ).strip()


def wiki_link(target: str, label: Optional[str] = None) -> str:
    return f"[[{target}|{label}]]" if label else f"[[{target}]]"


class MarkdownGenerator:
    """Build paper notes from metadata"""

    def __init__(self, pdf_aware: bool = True):
        """
        Args:
            pdf_aware: Emit the ``artifacts`` frontmatter field
        """
        self.pdf_aware = pdf_aware

    def build_frontmatter(
        self,
        metadata: PaperMetadata,
        target: NoteTarget,
        pdf_path: Optional[str] = None,
        discovered_via: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Dict[str, Any]:
        created_at = today or datetime.now(timezone.utc).date()
        frontmatter: Dict[str, Any] = {
            "created_at": created_at.isoformat(),
            "url": metadata.source_url,
            "authors": [wiki_link(author) for author in metadata.authors],
            "tags": ["paper"],
        }
        if self.pdf_aware:
            frontmatter["artifacts"] = [wiki_link(pdf_path, "pdf")] if pdf_path else []

        # Optional fields
        if target.alias:
            frontmatter["alias"] = target.alias
        if discovered_via:
            frontmatter["discovered_via"] = discovered_via
        if metadata.venue:
            frontmatter["publication_venue"] = re.sub(r"\s+", " ", metadata.venue).strip()
        if metadata.publication_date:
            frontmatter["date"] = metadata.publication_date

        return frontmatter

    def build_note(
        self,
        metadata: PaperMetadata,
        target: NoteTarget,
        pdf_path: Optional[str] = None,
        discovered_via: Optional[str] = None,
        today: Optional[date] = None,
    ) -> NoteDocument:
        """
        Render the full note text

        Args:
            metadata: Paper metadata
            target: Note naming information (supplies the alias)
            pdf_path: Vault-relative path of the cached PDF, if any
            discovered_via: Where the paper was found, if known
            today: Override for ``created_at``

        Returns:
            NoteDocument with the frontmatter mapping and markdown text
        """
        frontmatter = self.build_frontmatter(
            metadata,
            target,
            pdf_path=pdf_path,
            discovered_via=discovered_via,
            today=today,
        )
        text = NOTE_TEMPLATE.format(
            frontmatter=dump_frontmatter(frontmatter),
            abstract=metadata.abstract.strip() if metadata.abstract else "",
        )
        return NoteDocument(frontmatter=frontmatter, text=text)
