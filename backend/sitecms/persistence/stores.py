"""
Durable string-keyed stores for serialized settings documents.

Both stores keep opaque strings; serialization is the bridge's job.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from sitecms.extensions import db
from sitecms.models.settings_document import SettingsDocument
from sitecms.utils.transaction import transactional

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The underlying store could not read or write a value."""


class StorageQuotaExceeded(StorageError):
    pass


class SqlDocumentStore:
    """One row per document key in ``settings_documents``."""

    def _row(self, key: str) -> Optional[SettingsDocument]:
        try:
            return db.session.execute(
                db.select(SettingsDocument).filter_by(key=key)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageError(f"Could not read '{key}': {exc}") from exc

    def read(self, key: str) -> Optional[str]:
        row = self._row(key)
        return row.value if row is not None else None

    def write(self, key: str, text: str, actor_id: Optional[str] = None) -> None:
        try:
            with transactional():
                row = db.session.execute(
                    db.select(SettingsDocument).filter_by(key=key)
                ).scalar_one_or_none()

                if row is None:
                    row = SettingsDocument()
                    row.key = key
                    row.revision = 1
                    db.session.add(row)
                else:
                    row.revision = (row.revision or 0) + 1

                row.value = text
                row.updated_by = actor_id
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not write '{key}': {exc}") from exc

    def delete(self, key: str) -> None:
        with transactional():
            db.session.execute(
                db.delete(SettingsDocument).where(SettingsDocument.key == key)
            )

    def last_modified(self, key: str) -> Optional[datetime]:
        row = self._row(key)
        return row.updated_at if row is not None else None


class JsonFileStore:
    """
    All keys in a single JSON object on disk, like browser local storage.

    ``max_bytes`` caps the size of the whole file; a write that would
    exceed it raises ``StorageQuotaExceeded`` and leaves the file as is.
    """

    def __init__(self, path: str, max_bytes: Optional[int] = None):
        self.path = path
        self.max_bytes = max_bytes

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            raise StorageError(f"Could not read {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        encoded = json.dumps(data, ensure_ascii=False)
        size = len(encoded.encode("utf-8"))
        if self.max_bytes is not None and size > self.max_bytes:
            raise StorageQuotaExceeded(
                f"Writing {size} bytes would exceed the {self.max_bytes} byte quota"
            )

        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        except OSError as exc:
            raise StorageError(f"Could not write {self.path}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(encoded)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            try:
                os.unlink(tmp_path)
            except OSError:
                logger.warning("Could not remove temp file %s", tmp_path)
            raise StorageError(f"Could not write {self.path}: {exc}") from exc

    def read(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def write(self, key: str, text: str, actor_id: Optional[str] = None) -> None:
        data = self._read_all()
        data[key] = text
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)

    def last_modified(self, key: str) -> Optional[datetime]:
        # the file keeps no per-key timestamps
        return None
