"""
Declarative catalogue of the `logistics` database: which collections exist and
which compound indexes they carry.

Every index pairs a lookup key (an identifier or a time field) with the
record's discriminator (`isActive` soft-delete flag or `status`), so
"active/pending records for X" is answered from one index.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from pymongo import ASCENDING

ETA_CALCULATIONS = "eta_calculations"
ROUTES = "routes"
RETURN_REQUESTS = "return_requests"

COLLECTIONS: Tuple[str, ...] = (ETA_CALCULATIONS, ROUTES, RETURN_REQUESTS)

IndexKeys = List[Tuple[str, int]]


@dataclass(frozen=True)
class IndexSpec:
    collection: str
    keys: Tuple[Tuple[str, int], ...]

    @property
    def name(self) -> str:
        # same shape as MongoDB's generated default name
        return "_".join(f"{field}_{order}" for field, order in self.keys)

    @property
    def qualified_name(self) -> str:
        return f"{self.collection}.{self.name}"

    def key_list(self) -> IndexKeys:
        return [(field, order) for field, order in self.keys]


def _paired(collection: str, discriminator: str, *lookups: str) -> List[IndexSpec]:
    return [
        IndexSpec(collection, ((field, ASCENDING), (discriminator, ASCENDING)))
        for field in lookups
    ]


INDEXES: Tuple[IndexSpec, ...] = tuple(
    _paired(ETA_CALCULATIONS, "isActive",
            "parcelId", "depotId", "driverId", "estimatedArrival")
    + _paired(ROUTES, "status",
              "depotId", "driverId", "vehicleId", "plannedStartTime")
    + _paired(RETURN_REQUESTS, "isActive",
              "returnId", "status", "customerId", "parcelId", "ttlExpiry")
)


def indexes_for(collection: str) -> List[IndexSpec]:
    return [spec for spec in INDEXES if spec.collection == collection]


def index_table() -> Dict[str, List[IndexKeys]]:
    """Expected key patterns per collection, in declaration order."""
    return {name: [spec.key_list() for spec in indexes_for(name)] for name in COLLECTIONS}
