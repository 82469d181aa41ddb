# logistics/repos/routes.py
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Union

from logistics.core.errors import InvalidTransitionError, NotFoundError
from logistics.core.schema import ROUTES
from logistics.core.states import can_transition_route
from logistics.models.route import Route
from logistics.repos.common import collect, maybe_oid, status_filter, to_doc, to_model, utcnow

log = logging.getLogger(__name__)

Status = Union[str, Sequence[str]]

def _col(db):
    return db[ROUTES]

async def find_routes_for_depot(db, depot_id: str, status: Status = "PLANNED") -> List[Route]:
    cur = _col(db).find({"depotId": depot_id, "status": status_filter(status)}).sort("plannedStartTime", 1)
    return await collect(Route, cur)

async def find_routes_for_driver(db, driver_id: str, status: Status = ("PLANNED", "IN_PROGRESS"),
                                 starting_from: Optional[datetime] = None) -> List[Route]:
    q = {"driverId": driver_id, "status": status_filter(status)}
    if starting_from is not None:
        q["plannedStartTime"] = {"$gte": starting_from}
    cur = _col(db).find(q).sort("plannedStartTime", 1)
    return await collect(Route, cur)

async def find_routes_for_vehicle(db, vehicle_id: str, status: Status = ("PLANNED", "IN_PROGRESS")) -> List[Route]:
    cur = _col(db).find({"vehicleId": vehicle_id, "status": status_filter(status)}).sort("plannedStartTime", 1)
    return await collect(Route, cur)

async def find_routes_starting_between(db, start: datetime, end: datetime, status: Status = "PLANNED") -> List[Route]:
    cur = _col(db).find({
        "plannedStartTime": {"$gte": start, "$lte": end},
        "status": status_filter(status),
    }).sort("plannedStartTime", 1)
    return await collect(Route, cur)

async def count_routes_for_depot(db, depot_id: str, status: Status = "PLANNED") -> int:
    return await _col(db).count_documents({"depotId": depot_id, "status": status_filter(status)})

async def insert_route(db, route: Route) -> Route:
    doc = to_doc(route)
    doc["lastUpdated"] = utcnow()
    res = await _col(db).insert_one(doc)
    doc["_id"] = res.inserted_id
    return to_model(Route, doc)

async def update_route_status(db, route_id: str, status: str) -> Route:
    oid = maybe_oid(route_id)
    cur = await _col(db).find_one({"_id": oid})
    if not cur:
        raise NotFoundError(f"route {route_id} not found")
    src = cur.get("status")
    if not can_transition_route(src, status):
        raise InvalidTransitionError("route", src, status)

    now = utcnow()
    res = await _col(db).update_one(
        {"_id": oid, "status": src},
        {"$set": {"status": status, "lastUpdated": now}},
    )
    if res.matched_count == 0:
        # someone moved it in between
        raise InvalidTransitionError("route", src, status)
    log.info("route %s: %s -> %s", route_id, src, status)
    return to_model(Route, {**cur, "status": status, "lastUpdated": now})
