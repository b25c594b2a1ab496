# Overview: Snapshot persistence; whole-document JSON file, optional write-through mirror, single-writer store.

"""
Storage Service - one JSON document, three collections

The document is always read and written whole:

    {"products": [...], "customers": [...], "transactions": [...]}

Backends only move raw documents (dicts). ``Store`` owns typed snapshots,
serializes writers with a per-store lock, and keeps the last snapshot it
successfully read or wrote so readers still get data when the primary
medium is unreachable.

MIRROR: ``MirroredBackend`` wraps a primary backend and copies every
successful write to a secondary medium. The secondary is read only when the
primary raises ``StorageUnavailable``; it is never the source of truth.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Column, DateTime, MetaData, String, Table, Text, create_engine, select
from sqlalchemy.exc import SQLAlchemyError

from wings.models import Customer, Product, Snapshot, Transaction
from wings.services.identity_service import IdentityService
from wings.time_utils import utcnow

logger = logging.getLogger(__name__)

COLLECTIONS = Snapshot.COLLECTIONS

_RECORD_TYPES = {
    "products": Product,
    "customers": Customer,
    "transactions": Transaction,
}


class StorageUnavailable(Exception):
    """Raised when the persisted document cannot be read or written (503)."""


def empty_document() -> dict:
    return {name: [] for name in COLLECTIONS}


def _check_document(document) -> dict:
    if not isinstance(document, dict):
        raise StorageUnavailable("Data document is not a JSON object")
    for name in COLLECTIONS:
        if not isinstance(document.get(name, []), list):
            raise StorageUnavailable(f"Data document field '{name}' is not a list")
    return document


def dump_document(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


class JsonFileBackend:
    """Primary medium: a single pretty-printed JSON file, replaced atomically."""

    name = "json-file"

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def ensure_exists(self) -> bool:
        """Create the document with three empty collections if it is absent."""
        if self.path.exists():
            return False
        self.write_document(empty_document())
        logger.info("Created new data file at %s", self.path)
        return True

    def read_document(self) -> dict:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return empty_document()
        except OSError as exc:
            raise StorageUnavailable(f"Cannot read {self.path}: {exc}") from exc

        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageUnavailable(f"Invalid JSON in {self.path}: {exc}") from exc

        return _check_document(document)

    def write_document(self, document: dict) -> None:
        payload = dump_document(document)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageUnavailable(f"Cannot write {self.path}: {exc}") from exc


_metadata = MetaData()

snapshot_mirror = Table(
    "snapshot_mirror",
    _metadata,
    Column("collection", String(32), primary_key=True),
    Column("payload", Text, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)


class SqlMirrorBackend:
    """Secondary medium: one row per collection in any SQLAlchemy database."""

    name = "sql-mirror"

    def __init__(self, url: str):
        self.url = url
        self.engine = create_engine(url, future=True)
        _metadata.create_all(self.engine)

    def read_document(self) -> dict:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(
                    select(snapshot_mirror.c.collection, snapshot_mirror.c.payload)
                ).all()
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Cannot read mirror: {exc}") from exc

        document = empty_document()
        for collection, payload in rows:
            if collection in document:
                document[collection] = json.loads(payload)
        return document

    def write_document(self, document: dict) -> None:
        now = utcnow()
        try:
            with self.engine.begin() as conn:
                conn.execute(snapshot_mirror.delete())
                conn.execute(
                    snapshot_mirror.insert(),
                    [
                        {
                            "collection": name,
                            "payload": json.dumps(document.get(name, []), ensure_ascii=False),
                            "updated_at": now,
                        }
                        for name in COLLECTIONS
                    ],
                )
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Cannot write mirror: {exc}") from exc

    def dispose(self) -> None:
        self.engine.dispose()


class MirroredBackend:
    """Write-through decorator: primary first, then mirror; mirror read only on primary failure."""

    def __init__(self, primary, mirror):
        self.primary = primary
        self.mirror = mirror
        self.name = f"{primary.name}+{mirror.name}"

    def ensure_exists(self) -> bool:
        ensure = getattr(self.primary, "ensure_exists", None)
        return ensure() if ensure else False

    def read_document(self) -> dict:
        try:
            return self.primary.read_document()
        except StorageUnavailable:
            logger.warning("Primary storage unreadable; serving mirror copy", exc_info=True)
            return self.mirror.read_document()

    def write_document(self, document: dict) -> None:
        self.primary.write_document(document)
        try:
            self.mirror.write_document(document)
        except StorageUnavailable:
            logger.error("Mirror write failed; primary write kept", exc_info=True)


class Store:
    """
    Single owner of the three collections.

    - snapshot(): fresh whole-document read, falls back to last-known-good
    - get()/replace(): per-collection read and replace-all
    - session(): read-modify-write under the store lock
    """

    def __init__(self, backend, ids: IdentityService | None = None):
        self.backend = backend
        self.ids = ids or IdentityService()
        self._lock = threading.RLock()
        self._last_good = Snapshot()
        self.last_error: StorageUnavailable | None = None
        self.created_file = False

    def initialize(self) -> Snapshot:
        """
        Create the document if missing and prime the last-known-good snapshot.

        ``created_file`` is set once this store has created the document.
        """
        with self._lock:
            ensure = getattr(self.backend, "ensure_exists", None)
            if ensure is not None:
                self.created_file = bool(ensure()) or self.created_file
            return self.snapshot()

    def _read(self) -> Snapshot:
        snapshot = Snapshot.from_document(self.backend.read_document())
        self.ids.observe(
            record.id
            for name in COLLECTIONS
            for record in getattr(snapshot, name)
        )
        return snapshot

    def snapshot(self) -> Snapshot:
        with self._lock:
            try:
                snapshot = self._read()
            except StorageUnavailable as exc:
                logger.error("Storage unavailable, serving last-known-good snapshot: %s", exc)
                self.last_error = exc
                return self._last_good.copy()
            self.last_error = None
            self._last_good = snapshot
            return snapshot.copy()

    def get(self, collection: str) -> list:
        if collection not in COLLECTIONS:
            raise KeyError(collection)
        return list(getattr(self.snapshot(), collection))

    def replace(self, collection: str, items: list) -> None:
        if collection not in COLLECTIONS:
            raise KeyError(collection)
        record_type = _RECORD_TYPES[collection]
        if any(not isinstance(item, record_type) for item in items):
            raise TypeError(f"{collection} must contain {record_type.__name__} records")
        with self.session() as snapshot:
            setattr(snapshot, collection, list(items))

    def save(self, snapshot: Snapshot) -> None:
        with self._lock:
            self.backend.write_document(snapshot.to_document())
            self._last_good = snapshot.copy()
            self.last_error = None

    @contextmanager
    def session(self) -> Iterator[Snapshot]:
        """
        Yield a private snapshot to mutate; persist it on clean exit.

        Refuses to start when the primary read fails so a bad read never
        overwrites good data. Nothing is written if the body raises.
        """
        with self._lock:
            try:
                snapshot = self._read()
            except StorageUnavailable as exc:
                self.last_error = exc
                raise
            yield snapshot
            self.save(snapshot)
