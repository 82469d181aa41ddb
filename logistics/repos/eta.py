# logistics/repos/eta.py
"""
Lookups on `eta_calculations`. Every query filters on `isActive: true`
together with one of parcelId / depotId / driverId / estimatedArrival, which
are the leading keys of the collection's indexes.
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from logistics.core.schema import ETA_CALCULATIONS
from logistics.models.eta import ETACalculation
from logistics.repos.common import collect, to_doc, to_model, utcnow

log = logging.getLogger(__name__)

NEWEST_FIRST = [("calculatedAt", -1), ("_id", -1)]

def _col(db):
    return db[ETA_CALCULATIONS]

async def find_active_eta_for_parcel(db, parcel_id: str) -> Optional[ETACalculation]:
    # no unique index: if several are active, the newest calculation wins
    doc = await _col(db).find_one({"parcelId": parcel_id, "isActive": True}, sort=NEWEST_FIRST)
    return to_model(ETACalculation, doc)

async def find_active_etas_for_parcels(db, parcel_ids: Sequence[str]) -> List[ETACalculation]:
    cur = _col(db).find({"parcelId": {"$in": list(parcel_ids)}, "isActive": True})
    return await collect(ETACalculation, cur)

async def find_active_etas_for_depot(db, depot_id: str, arriving_after: Optional[datetime] = None) -> List[ETACalculation]:
    q = {"depotId": depot_id, "isActive": True}
    if arriving_after is not None:
        q["estimatedArrival"] = {"$gte": arriving_after}
    cur = _col(db).find(q).sort("estimatedArrival", 1)
    return await collect(ETACalculation, cur)

async def find_active_etas_for_driver(db, driver_id: str) -> List[ETACalculation]:
    cur = _col(db).find({"driverId": driver_id, "isActive": True}).sort("estimatedArrival", 1)
    return await collect(ETACalculation, cur)

async def find_active_etas_arriving_between(db, start: datetime, end: datetime) -> List[ETACalculation]:
    cur = _col(db).find({
        "estimatedArrival": {"$gte": start, "$lte": end},
        "isActive": True,
    }).sort("estimatedArrival", 1)
    return await collect(ETACalculation, cur)

async def count_active_etas_for_depot(db, depot_id: str) -> int:
    return await _col(db).count_documents({"depotId": depot_id, "isActive": True})

async def deactivate_etas_for_parcel(db, parcel_id: str) -> int:
    """Soft-delete every active ETA for the parcel; returns how many changed."""
    res = await _col(db).update_many(
        {"parcelId": parcel_id, "isActive": True},
        {"$set": {"isActive": False, "lastUpdated": utcnow()}},
    )
    return res.modified_count

async def insert_eta(db, eta: ETACalculation, supersede: bool = True) -> ETACalculation:
    """
    Store a new calculation. With `supersede`, older active records for the
    same parcel are deactivated first so readers see a single live ETA.
    """
    if supersede:
        n = await deactivate_etas_for_parcel(db, eta.parcelId)
        if n:
            log.debug("superseded %d active ETA(s) for parcel %s", n, eta.parcelId)
    now = utcnow()
    doc = to_doc(eta)
    doc["isActive"] = True
    doc.setdefault("calculatedAt", now)
    doc["lastUpdated"] = now
    res = await _col(db).insert_one(doc)
    doc["_id"] = res.inserted_id
    return to_model(ETACalculation, doc)
