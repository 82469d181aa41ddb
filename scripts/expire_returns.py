import asyncio

from logistics.core.config import settings
from logistics.core.db import close_client, get_db
from logistics.core.logs import configure_logging
from logistics.services.ttl_worker import sweep_once

async def main():
    configure_logging(settings.log_level)
    try:
        n = await sweep_once(get_db())
    finally:
        close_client()
    print(f"Expired {n} return request(s)")

if __name__ == "__main__":
    asyncio.run(main())
