"""
Hackathon Repository - storage backends for reconciled hackathon records.

The reconciliation core only needs two operations from persistence: load
every record and upsert one record by id. Each backend implements exactly
that, so the service can run against a JSON data directory, a SQL database
or a plain dictionary in tests.
"""

import copy
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from config import HACKATHON_STORE_BACKEND, HACKATHONS_DATA_DIR
from database_utils import DatabaseManager, HackathonRow, get_db_manager
from hackathon_models import Hackathon
from shared_utils import logger


class HackathonStoreError(Exception):
    """Raised when a storage backend cannot read or write records."""
    pass


class HackathonStore(ABC):
    """Keyed store of hackathon records, one record per id."""

    @abstractmethod
    def load_all(self) -> List[Hackathon]:
        """Load every stored record, sorted by id."""

    @abstractmethod
    def upsert(self, hackathon: Hackathon) -> None:
        """Insert or replace the record with hackathon.id."""

    def upsert_many(self, hackathons: Iterable[Hackathon]) -> int:
        count = 0
        for hackathon in hackathons:
            self.upsert(hackathon)
            count += 1
        return count

    def get(self, hackathon_id: str) -> Optional[Hackathon]:
        for hackathon in self.load_all():
            if hackathon.id == hackathon_id:
                return hackathon
        return None


class InMemoryHackathonStore(HackathonStore):
    """Dictionary-backed store for tests and dry runs."""

    def __init__(self, hackathons: Optional[Iterable[Hackathon]] = None):
        self._records: Dict[str, dict] = {}
        for hackathon in hackathons or []:
            self.upsert(hackathon)

    def load_all(self) -> List[Hackathon]:
        return [Hackathon.from_dict(copy.deepcopy(self._records[key])) for key in sorted(self._records)]

    def upsert(self, hackathon: Hackathon) -> None:
        # Stored serialized so callers never share mutable state with the store
        self._records[hackathon.id] = copy.deepcopy(hackathon.to_dict())

    def get(self, hackathon_id: str) -> Optional[Hackathon]:
        data = self._records.get(hackathon_id)
        return Hackathon.from_dict(copy.deepcopy(data)) if data else None

    def __len__(self) -> int:
        return len(self._records)


class JsonDirectoryHackathonStore(HackathonStore):
    """One <id>.json file per record in a data directory."""

    def __init__(self, data_dir: Union[str, Path] = HACKATHONS_DATA_DIR):
        self.data_dir = Path(data_dir)

    def _path_for(self, hackathon_id: str) -> Path:
        return self.data_dir / f"{hackathon_id}.json"

    def load_all(self) -> List[Hackathon]:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            files = sorted(self.data_dir.glob('*.json'))
        except OSError as e:
            raise HackathonStoreError(f"Cannot read data directory {self.data_dir}: {e}")

        hackathons = []
        for path in files:
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    hackathons.append(Hackathon.from_dict(json.load(f)))
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.log("error", f"Invalid hackathon data in {path.name}", error=str(e))

        hackathons.sort(key=lambda h: h.id)
        return hackathons

    def upsert(self, hackathon: Hackathon) -> None:
        path = self._path_for(hackathon.id)
        tmp_path = path.with_suffix('.json.tmp')
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(hackathon.to_dict(), f, indent=2, ensure_ascii=False)
                f.write('\n')
            os.replace(tmp_path, path)
        except OSError as e:
            raise HackathonStoreError(f"Cannot write {path}: {e}")

    def get(self, hackathon_id: str) -> Optional[Hackathon]:
        path = self._path_for(hackathon_id)
        if not path.exists():
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return Hackathon.from_dict(json.load(f))


class SqlHackathonStore(HackathonStore):
    """SQLAlchemy-backed store; one row per record id."""

    def __init__(self, db_manager: Optional[DatabaseManager] = None):
        self.db_manager = db_manager or get_db_manager()

    def load_all(self) -> List[Hackathon]:
        try:
            with self.db_manager.get_session() as session:
                rows = session.query(HackathonRow).order_by(HackathonRow.id).all()
                return [Hackathon.from_dict(row.payload) for row in rows]
        except SQLAlchemyError as e:
            raise HackathonStoreError(f"Failed to load hackathons: {e}")

    def upsert(self, hackathon: Hackathon) -> None:
        try:
            with self.db_manager.get_session() as session:
                session.merge(HackathonRow.from_record(hackathon.to_dict()))
        except SQLAlchemyError as e:
            raise HackathonStoreError(f"Failed to save hackathon {hackathon.id}: {e}")

    def get(self, hackathon_id: str) -> Optional[Hackathon]:
        with self.db_manager.get_session() as session:
            row = session.get(HackathonRow, hackathon_id)
            return Hackathon.from_dict(row.payload) if row else None


def get_hackathon_store(backend: Optional[str] = None, data_dir: Optional[str] = None,
                        database_url: Optional[str] = None) -> HackathonStore:
    """
    Build a store for the configured backend.

    Args:
        backend: 'json', 'sql' or 'memory' (defaults to HACKATHON_STORE_BACKEND)
        data_dir: Directory for the json backend
        database_url: Database URL for the sql backend

    Returns:
        HackathonStore instance
    """
    backend = (backend or HACKATHON_STORE_BACKEND).lower()

    if backend == 'json':
        return JsonDirectoryHackathonStore(data_dir or HACKATHONS_DATA_DIR)
    if backend == 'sql':
        manager = DatabaseManager(database_url) if database_url else get_db_manager()
        manager.create_tables()
        return SqlHackathonStore(manager)
    if backend == 'memory':
        return InMemoryHackathonStore()

    raise ValueError(f"Unknown store backend: {backend}")
