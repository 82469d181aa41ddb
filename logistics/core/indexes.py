# logistics/core/indexes.py
"""
Schema initializer for the `logistics` database.

Creates the managed collections and their compound indexes, one after the
other. Every step is create-if-absent, so the whole run can be repeated after
a failure; nothing is rolled back and driver errors are left to propagate.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple, Union

from pymongo.errors import CollectionInvalid

from logistics.core.errors import SchemaConflictError
from logistics.core.schema import COLLECTIONS, INDEXES, IndexSpec

log = logging.getLogger(__name__)

COMPLETION_MESSAGE = "MongoDB initialization completed successfully"


@dataclass
class SchemaReport:
    database: str
    created_collections: List[str] = field(default_factory=list)
    created_indexes: List[str] = field(default_factory=list)
    collections: int = 0
    indexes: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.created_collections or self.created_indexes)

    def as_dict(self) -> Dict:
        return {
            "database": self.database,
            "created_collections": list(self.created_collections),
            "created_indexes": list(self.created_indexes),
            "collections": self.collections,
            "indexes": self.indexes,
            "changed": self.changed,
        }


KeyPattern = List[Tuple[str, Union[int, str]]]


def _keys_of(info: Dict) -> KeyPattern:
    # special index types (2dsphere, text, hashed) keep their string value
    return [(k, int(v) if isinstance(v, (int, float)) else v) for k, v in info["key"].items()]


async def ensure_collections(db, names: Iterable[str] = COLLECTIONS) -> List[str]:
    """Create each named collection that is not there yet. Others are left alone."""
    existing = set(await db.list_collection_names())
    created: List[str] = []
    for name in names:
        if name in existing:
            log.debug("collection %s already present", name)
            continue
        try:
            await db.create_collection(name)
        except CollectionInvalid:
            # created by a concurrent run since the listing
            log.debug("collection %s appeared concurrently", name)
            existing.add(name)
            continue
        existing.add(name)
        created.append(name)
        log.info("created collection %s", name)
    return created


async def ensure_index(col, spec: IndexSpec) -> bool:
    existing = {ix["name"]: ix async for ix in col.list_indexes()}
    found = existing.get(spec.name)
    if found is not None:
        if _keys_of(found) != spec.key_list():
            raise SchemaConflictError(spec.collection, spec.name, spec.key_list(), _keys_of(found))
        log.debug("index %s already present", spec.qualified_name)
        return False
    await col.create_index(spec.key_list(), name=spec.name)
    log.info("created index %s", spec.qualified_name)
    return True


async def ensure_indexes(db, specs: Iterable[IndexSpec] = INDEXES) -> List[str]:
    created: List[str] = []
    for spec in specs:
        if await ensure_index(db[spec.collection], spec):
            created.append(spec.qualified_name)
    return created


async def init_schema(db) -> SchemaReport:
    """Ensure collections, then indexes, and report what changed."""
    report = SchemaReport(database=db.name)
    report.created_collections = await ensure_collections(db)
    report.created_indexes = await ensure_indexes(db)

    current = await describe_schema(db)
    report.collections = len(current)
    report.indexes = sum(len(v) for v in current.values())

    log.info(
        "%s (%s: %d collections, %d indexes, %d created)",
        COMPLETION_MESSAGE, report.database, report.collections,
        report.indexes, len(report.created_collections) + len(report.created_indexes),
    )
    return report


async def describe_schema(db, names: Iterable[str] = COLLECTIONS) -> Dict[str, List[KeyPattern]]:
    """
    Key patterns of the secondary indexes on each managed collection that
    exists. `_id_` is left out.
    """
    present = set(await db.list_collection_names())
    out: Dict[str, List[KeyPattern]] = {}
    for name in names:
        if name not in present:
            continue
        out[name] = [
            _keys_of(ix) async for ix in db[name].list_indexes() if ix["name"] != "_id_"
        ]
    return out


async def missing_indexes(db) -> List[IndexSpec]:
    current = await describe_schema(db)
    return [spec for spec in INDEXES if spec.key_list() not in current.get(spec.collection, [])]
