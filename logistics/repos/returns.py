# logistics/repos/returns.py
"""
Lookups and lifecycle updates on `return_requests`.

Reads always pin `isActive: true`; the TTL sweep uses the
(ttlExpiry, isActive) index to find overdue requests.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Union

from logistics.core.config import settings
from logistics.core.errors import InvalidTransitionError, NotFoundError
from logistics.core.schema import RETURN_REQUESTS
from logistics.core.states import RETURN_EXPIRABLE, can_transition_return
from logistics.models.returns import ReturnRequest
from logistics.repos.common import collect, status_filter, to_doc, to_model, utcnow

log = logging.getLogger(__name__)

def _col(db):
    return db[RETURN_REQUESTS]

async def find_active_return(db, return_id: str) -> Optional[ReturnRequest]:
    doc = await _col(db).find_one({"returnId": return_id, "isActive": True})
    return to_model(ReturnRequest, doc)

async def find_active_returns_by_status(db, status: Union[str, Sequence[str]]) -> List[ReturnRequest]:
    cur = _col(db).find({"status": status_filter(status), "isActive": True})
    return await collect(ReturnRequest, cur)

async def find_active_returns_for_customer(db, customer_id: str) -> List[ReturnRequest]:
    cur = _col(db).find({"customerId": customer_id, "isActive": True})
    return await collect(ReturnRequest, cur)

async def find_active_returns_for_parcel(db, parcel_id: str) -> List[ReturnRequest]:
    cur = _col(db).find({"parcelId": parcel_id, "isActive": True})
    return await collect(ReturnRequest, cur)

async def find_expired_returns(db, now: Optional[datetime] = None) -> List[ReturnRequest]:
    now = now or utcnow()
    cur = _col(db).find({"ttlExpiry": {"$lt": now}, "isActive": True}).sort("ttlExpiry", 1)
    return await collect(ReturnRequest, cur)

async def count_active_returns_by_status(db, status: str) -> int:
    return await _col(db).count_documents({"status": status, "isActive": True})

async def insert_return(db, req: ReturnRequest) -> ReturnRequest:
    now = utcnow()
    doc = to_doc(req)
    doc.setdefault("requestedAt", now)
    doc.setdefault("ttlExpiry", doc["requestedAt"] + timedelta(hours=settings.return_ttl_hours))
    doc["lastUpdated"] = now
    res = await _col(db).insert_one(doc)
    doc["_id"] = res.inserted_id
    return to_model(ReturnRequest, doc)

async def _active_or_raise(db, return_id: str) -> dict:
    doc = await _col(db).find_one({"returnId": return_id, "isActive": True})
    if not doc:
        raise NotFoundError(f"no active return {return_id}", details={"returnId": return_id})
    return doc

async def transition_return(db, return_id: str, status: str) -> ReturnRequest:
    doc = await _active_or_raise(db, return_id)
    src = doc.get("status")
    if not can_transition_return(src, status):
        raise InvalidTransitionError("return", src, status)

    now = utcnow()
    res = await _col(db).update_one(
        {"_id": doc["_id"], "status": src},
        {"$set": {"status": status, "lastUpdated": now}},
    )
    if res.matched_count == 0:
        raise InvalidTransitionError("return", src, status)
    log.info("return %s: %s -> %s", return_id, src, status)
    return to_model(ReturnRequest, {**doc, "status": status, "lastUpdated": now})

async def extend_return_ttl(db, return_id: str, hours: int) -> ReturnRequest:
    doc = await _active_or_raise(db, return_id)
    now = utcnow()
    base = doc.get("ttlExpiry") or now
    expiry = base + timedelta(hours=hours)
    await _col(db).update_one({"_id": doc["_id"]}, {"$set": {"ttlExpiry": expiry, "lastUpdated": now}})
    return to_model(ReturnRequest, {**doc, "ttlExpiry": expiry, "lastUpdated": now})

async def reset_return_ttl(db, return_id: str, hours: int, now: Optional[datetime] = None) -> ReturnRequest:
    """Restart the clock: ttlExpiry becomes `now + hours`."""
    doc = await _active_or_raise(db, return_id)
    now = now or utcnow()
    expiry = now + timedelta(hours=hours)
    await _col(db).update_one({"_id": doc["_id"]}, {"$set": {"ttlExpiry": expiry, "lastUpdated": now}})
    log.info("reset ttl for return %s to %d hour(s) from now", return_id, hours)
    return to_model(ReturnRequest, {**doc, "ttlExpiry": expiry, "lastUpdated": now})

async def find_returns_expiring_within(db, hours: float = 2, now: Optional[datetime] = None) -> List[ReturnRequest]:
    """Active, still-expirable returns whose ttlExpiry falls in [now, now + hours)."""
    now = now or utcnow()
    cur = _col(db).find({
        "ttlExpiry": {"$gte": now, "$lt": now + timedelta(hours=hours)},
        "isActive": True,
        "status": {"$in": RETURN_EXPIRABLE},
    }).sort("ttlExpiry", 1)
    return await collect(ReturnRequest, cur)

async def expire_returns(db, now: Optional[datetime] = None) -> int:
    """Move overdue active returns that may still expire to EXPIRED."""
    now = now or utcnow()
    res = await _col(db).update_many(
        {"ttlExpiry": {"$lt": now}, "isActive": True, "status": {"$in": RETURN_EXPIRABLE}},
        {"$set": {"status": "EXPIRED", "lastUpdated": now}},
    )
    if res.modified_count:
        log.info("expired %d return request(s)", res.modified_count)
    return res.modified_count
