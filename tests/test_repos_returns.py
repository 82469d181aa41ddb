from datetime import datetime, timedelta, timezone

import pytest

from logistics.core.config import settings
from logistics.core.errors import InvalidTransitionError, NotFoundError
from logistics.models.returns import ReturnRequest
from logistics.repos import returns as repo

pytestmark = pytest.mark.anyio

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)

def _ret(rid, customer="C1", parcel="P1", status="REQUESTED", ttl_hours=24, **kw):
    return ReturnRequest(returnId=rid, customerId=customer, parcelId=parcel, status=status,
                         requestedAt=NOW - timedelta(hours=48),
                         ttlExpiry=NOW + timedelta(hours=ttl_hours), **kw)

async def test_default_ttl_from_settings(db):
    req = ReturnRequest(returnId="RET-1", customerId="C1", parcelId="P1", requestedAt=NOW)
    saved = await repo.insert_return(db, req)
    assert saved.ttlExpiry == NOW + timedelta(hours=settings.return_ttl_hours)
    assert saved.isActive and saved.status == "REQUESTED"

async def test_lookups_only_see_active(db):
    await repo.insert_return(db, _ret("RET-1"))
    await repo.insert_return(db, _ret("RET-2", parcel="P2", status="APPROVED"))
    await repo.insert_return(db, _ret("RET-3", isActive=False))

    assert (await repo.find_active_return(db, "RET-1")).customerId == "C1"
    assert await repo.find_active_return(db, "RET-3") is None
    assert sorted(r.returnId for r in await repo.find_active_returns_for_customer(db, "C1")) == ["RET-1", "RET-2"]
    assert [r.returnId for r in await repo.find_active_returns_for_parcel(db, "P2")] == ["RET-2"]
    assert [r.returnId for r in await repo.find_active_returns_by_status(db, "REQUESTED")] == ["RET-1"]
    assert await repo.count_active_returns_by_status(db, "APPROVED") == 1

async def test_transition_walks_the_lifecycle(db):
    await repo.insert_return(db, _ret("RET-1"))
    for status in ("PENDING_APPROVAL", "APPROVED", "PICKUP_SCHEDULED", "PICKED_UP",
                   "IN_TRANSIT", "PROCESSING", "COMPLETED"):
        r = await repo.transition_return(db, "RET-1", status)
        assert r.status == status
    assert (await repo.find_active_return(db, "RET-1")).status == "COMPLETED"

async def test_illegal_transition_rejected(db):
    await repo.insert_return(db, _ret("RET-1"))
    with pytest.raises(InvalidTransitionError) as ei:
        await repo.transition_return(db, "RET-1", "COMPLETED")
    assert ei.value.details == {"kind": "return", "from": "REQUESTED", "to": "COMPLETED"}
    with pytest.raises(NotFoundError):
        await repo.transition_return(db, "RET-404", "APPROVED")

async def test_extend_ttl(db):
    await repo.insert_return(db, _ret("RET-1", ttl_hours=1))
    r = await repo.extend_return_ttl(db, "RET-1", 5)
    assert r.ttlExpiry == NOW + timedelta(hours=6)
    assert (await repo.find_active_return(db, "RET-1")).ttlExpiry == NOW + timedelta(hours=6)

async def test_expire_only_overdue_expirable(db):
    await repo.insert_return(db, _ret("RET-1", ttl_hours=-1))
    await repo.insert_return(db, _ret("RET-2", ttl_hours=-2, status="APPROVED"))
    await repo.insert_return(db, _ret("RET-3", ttl_hours=-3, status="IN_TRANSIT"))
    await repo.insert_return(db, _ret("RET-4", ttl_hours=3))
    await repo.insert_return(db, _ret("RET-5", ttl_hours=-4, isActive=False))

    overdue = await repo.find_expired_returns(db, NOW)
    assert [r.returnId for r in overdue] == ["RET-3", "RET-2", "RET-1"]

    assert await repo.expire_returns(db, NOW) == 2
    assert [r.returnId for r in await repo.find_active_returns_by_status(db, "EXPIRED")] == ["RET-1", "RET-2"]
    assert (await repo.find_active_return(db, "RET-3")).status == "IN_TRANSIT"
    assert await repo.expire_returns(db, NOW) == 0

async def test_reset_ttl_restarts_from_now(db):
    await repo.insert_return(db, _ret("RET-1", ttl_hours=-1))
    r = await repo.reset_return_ttl(db, "RET-1", 12, now=NOW)
    assert r.ttlExpiry == NOW + timedelta(hours=12)
    assert (await repo.find_active_return(db, "RET-1")).ttlExpiry == NOW + timedelta(hours=12)
    with pytest.raises(NotFoundError):
        await repo.reset_return_ttl(db, "RET-404", 12, now=NOW)

async def test_expiring_within_window(db):
    await repo.insert_return(db, _ret("RET-1", ttl_hours=1))
    await repo.insert_return(db, _ret("RET-2", ttl_hours=-1))
    await repo.insert_return(db, _ret("RET-3", ttl_hours=5))
    await repo.insert_return(db, _ret("RET-4", ttl_hours=1, status="IN_TRANSIT"))
    await repo.insert_return(db, _ret("RET-5", ttl_hours=1, isActive=False))
    await repo.insert_return(db, _ret("RET-6", ttl_hours=0.5, status="APPROVED"))

    soon = await repo.find_returns_expiring_within(db, 2, now=NOW)
    assert [r.returnId for r in soon] == ["RET-6", "RET-1"]
