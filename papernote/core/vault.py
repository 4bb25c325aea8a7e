"""
Filesystem store for notes and cached PDFs
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class Vault:
    """A directory that holds notes, addressed by ``/``-separated relative paths"""

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root).expanduser()

    def resolve(self, path: str) -> Path:
        return self.root.joinpath(*[part for part in path.split("/") if part])

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def create_text(self, path: str, content: str) -> Path:
        """
        Create a new UTF-8 text file

        The content is encoded before the file is created, so an
        unencodable note leaves nothing behind.

        Raises:
            FileExistsError: If something already exists at ``path``
            UnicodeEncodeError: If ``content`` cannot be encoded as UTF-8
        """
        return self.create_binary(path, content.encode("utf-8"))

    def create_binary(self, path: str, data: bytes) -> Path:
        """
        Create a new binary file

        A write that fails part-way removes the file again; a truncated file
        would otherwise count as an existing note or a cached PDF.

        Raises:
            FileExistsError: If something already exists at ``path``
        """
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("xb") as f:
            try:
                f.write(data)
                f.flush()
            except BaseException:
                f.close()
                target.unlink()
                raise
        logger.debug("Wrote %d bytes to %s", len(data), target)
        return target
