import asyncio

from seva_portal.core.config import settings
from seva_portal.deps import get_repo
from seva_portal.services.seed import seed_demo

async def main():
    if not settings.use_mongo:
        print("USE_MONGO is off; demo data would only live in this process.")
    repo = get_repo()
    await repo.ensure_indexes()
    created = await seed_demo(repo)
    print("Seeded:", created)
    print("Admin login:", settings.seed_admin_email)
    repo.close()

if __name__ == "__main__":
    asyncio.run(main())
