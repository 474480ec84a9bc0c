from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TEST_DB = Path(tempfile.mkdtemp(prefix="jobly-tests-")) / "jobly_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB}"
os.environ["ADMIN_TOKEN"] = "test-admin-token"
os.environ["APP_ENV"] = "test"

import pytest  # noqa: E402

from jobly.db.base import Base  # noqa: E402
from jobly.db import models  # noqa: E402,F401
from jobly.db.seed import seed_sample_data  # noqa: E402
from jobly.db.session import engine  # noqa: E402
from jobly.db.storage import StorageClient  # noqa: E402

ADMIN_HEADERS = {"Authorization": "Bearer test-admin-token"}


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    seed_sample_data(StorageClient(engine))
    yield


@pytest.fixture
def storage() -> StorageClient:
    return StorageClient(engine)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return dict(ADMIN_HEADERS)
