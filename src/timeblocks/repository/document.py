# SPDX-License-Identifier: MIT

import logging
from pathlib import Path

from timeblocks.configuration import DEFAULT_BLOCK_LABEL
from timeblocks.service.identity import ensure_ids_in_document

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Raised when a host document cannot be read or rewritten."""

    pass


class DocumentRepository:
    """
    Reads and rewrites host documents.

    Marker stamping runs at most once per file until :meth:`notify_changed`
    is called for that file.
    """

    def __init__(self) -> None:
        self._processed_paths: set[Path] = set()

    def read_document(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as error:
            raise DocumentError(f"could not read {path}: {error}") from error

    def write_document(self, path: Path, document_text: str) -> None:
        try:
            path.write_text(document_text, encoding="utf-8")
        except OSError as error:
            raise DocumentError(f"could not write {path}: {error}") from error

    def is_processed(self, path: Path) -> bool:
        return path.resolve() in self._processed_paths

    def notify_changed(self, path: Path) -> None:
        self._processed_paths.discard(path.resolve())

    def ensure_ids_in_file(
        self, path: Path, block_label: str = DEFAULT_BLOCK_LABEL
    ) -> bool:
        """Stamp missing tracker ids into ``path``; returns True if the file was rewritten."""
        resolved_path = path.resolve()
        if resolved_path in self._processed_paths:
            return False

        document_text = self.read_document(path)
        updated_text, was_modified = ensure_ids_in_document(document_text, block_label)
        if was_modified:
            self.write_document(path, updated_text)
            logger.info("stamped tracker ids into %s", path)

        self._processed_paths.add(resolved_path)
        return was_modified


DOCUMENT_REPO = DocumentRepository()
