import asyncio
import logging
from typing import Optional

from pymongo.errors import PyMongoError

from logistics.repos.returns import expire_returns, find_returns_expiring_within

log = logging.getLogger(__name__)

EXPIRING_SOON_HOURS = 2

async def sweep_once(db) -> int:
    """Expire overdue returns and warn about the ones close to expiry."""
    n = await expire_returns(db)
    if n:
        log.info("ttl sweep expired %d return(s)", n)
    for r in await find_returns_expiring_within(db, EXPIRING_SOON_HOURS):
        log.warning("return %s expires at %s", r.returnId, r.ttlExpiry.isoformat())
    return n

async def run_ttl_loop(db, interval: float = 60.0, stop: Optional[asyncio.Event] = None):
    """Sweep every `interval` seconds until `stop` is set. Database errors skip one round."""
    stop = stop or asyncio.Event()
    while not stop.is_set():
        try:
            await sweep_once(db)
        except PyMongoError:
            log.exception("ttl sweep failed, retrying in %.1fs", interval)
        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
        except asyncio.TimeoutError:
            continue
