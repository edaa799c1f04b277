from functools import lru_cache

from .core.config import settings

@lru_cache(maxsize=1)
def get_repo():
    if settings.use_mongo:
        from .core.db import get_client, get_db
        from .repos.mongo import MongoRepo
        return MongoRepo(get_db(), client=get_client())
    from .repos.inmemory import InMemoryRepo
    return InMemoryRepo()
