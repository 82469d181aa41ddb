import asyncio

from logistics.core.config import settings
from logistics.core.db import close_client, get_db
from logistics.core.indexes import COMPLETION_MESSAGE, init_schema
from logistics.core.logs import configure_logging

async def main():
    configure_logging(settings.log_level)
    try:
        await init_schema(get_db())
    finally:
        close_client()
    print(COMPLETION_MESSAGE)

if __name__ == "__main__":
    asyncio.run(main())
