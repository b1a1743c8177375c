"""
Record stores for every CareerHub collection.

Public API:
- Stores: bundle of one RecordStore per collection plus an atomic() unit
- sql_stores(db): Stores backed by a SQLAlchemy session
- memory_stores(): Stores backed by in-memory dicts

Usage:
    from careerhub.repositories import sql_stores

    stores = sql_stores(db)
    job = stores.jobs.get(job_id)
    with stores.atomic():
        stores.removed_jobs.insert({...})
        stores.jobs.delete(job_id)
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, ContextManager, Iterator

from sqlalchemy.orm import Session

from careerhub import models
from careerhub.repositories.base import Record, RecordStore
from careerhub.repositories.memory import InMemoryRecordStore
from careerhub.repositories.sql import SqlRecordStore

COLLECTION_MODELS = {
    "users": models.User,
    "sessions": models.AuthSession,
    "whitelist": models.WhitelistEntry,
    "access_requests": models.AccessRequest,
    "jobs": models.Job,
    "internships": models.Internship,
    "courses": models.Course,
    "removed_jobs": models.RemovedJob,
    "removed_internships": models.RemovedInternship,
    "cvs": models.CvShowcase,
    "cv_file_hashes": models.CvFileHash,
    "applications": models.Application,
    "profiles": models.Profile,
    "benefits": models.CommunityBenefit,
}


@dataclass
class Stores:
    """One store per collection; `atomic` groups several writes into one unit."""

    users: RecordStore
    sessions: RecordStore
    whitelist: RecordStore
    access_requests: RecordStore
    jobs: RecordStore
    internships: RecordStore
    courses: RecordStore
    removed_jobs: RecordStore
    removed_internships: RecordStore
    cvs: RecordStore
    cv_file_hashes: RecordStore
    applications: RecordStore
    profiles: RecordStore
    benefits: RecordStore
    atomic: Callable[[], ContextManager[None]]

    def collection(self, name: str) -> RecordStore:
        store = getattr(self, name, None)
        if not isinstance(store, RecordStore):
            raise KeyError(f"Unknown collection '{name}'")
        return store


def sql_stores(db: Session) -> Stores:
    @contextmanager
    def atomic() -> Iterator[None]:
        try:
            yield
            db.flush()
        except Exception:
            db.rollback()
            raise

    stores = {name: SqlRecordStore(db, model) for name, model in COLLECTION_MODELS.items()}
    return Stores(**stores, atomic=atomic)


def memory_stores() -> Stores:
    stores = {name: InMemoryRecordStore(name) for name in COLLECTION_MODELS}

    @contextmanager
    def atomic() -> Iterator[None]:
        snapshots = {name: store.snapshot() for name, store in stores.items()}
        try:
            yield
        except Exception:
            for name, store in stores.items():
                store.restore(snapshots[name])
            raise

    return Stores(**stores, atomic=atomic)


__all__ = [
    "Record",
    "RecordStore",
    "Stores",
    "SqlRecordStore",
    "InMemoryRecordStore",
    "COLLECTION_MODELS",
    "sql_stores",
    "memory_stores",
]
