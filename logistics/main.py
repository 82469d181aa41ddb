# logistics/main.py
import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from logistics.core.config import settings
from logistics.core.db import close_client, get_db
from logistics.core.indexes import init_schema
from logistics.core.logs import configure_logging
from logistics.routers import schema as schema_router
from logistics.services.ttl_worker import run_ttl_loop

log = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    # honour test overrides of the db dependency here too
    db = app.dependency_overrides.get(get_db, get_db)()
    if settings.init_schema_on_startup:
        await init_schema(db)
    else:
        log.info("schema initialization on startup disabled")

    stop = asyncio.Event()
    worker = None
    if settings.run_ttl_worker:
        worker = asyncio.create_task(run_ttl_loop(db, settings.ttl_sweep_interval, stop))
    yield
    if worker is not None:
        stop.set()
        await worker
    close_client()


app = FastAPI(lifespan=lifespan, title="Logistics Schema")

app.include_router(schema_router.router)    # /api/schema

# Health
@app.get("/health")
def health():
    return {"ok": True}
