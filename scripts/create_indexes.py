import asyncio

from seva_portal.core.config import settings
from seva_portal.core.db import get_client, get_db
from seva_portal.core.indexes import ensure_indexes

async def main():
    await ensure_indexes(get_db())
    print("Indexes ensured on", settings.mongo_db)
    get_client().close()

if __name__ == "__main__":
    asyncio.run(main())
