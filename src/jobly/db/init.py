from __future__ import annotations

from jobly.config import get_settings
from jobly.db.base import Base
from jobly.db.session import engine
from jobly.db import models  # noqa: F401
from jobly.db.seed import seed_sample_data
from jobly.db.storage import StorageClient


def ensure_data_directories() -> None:
    settings = get_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def init_database(seed: bool = False) -> dict[str, int]:
    ensure_data_directories()
    Base.metadata.create_all(bind=engine)

    if not seed:
        return {"seeded_companies": 0, "seeded_jobs": 0}
    return seed_sample_data(StorageClient(engine))
