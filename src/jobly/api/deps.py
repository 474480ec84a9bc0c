from __future__ import annotations

import hmac

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jobly.config import Settings, get_settings
from jobly.core.companies import CompanyService
from jobly.core.jobs import JobService
from jobly.db.session import get_storage
from jobly.db.storage import StorageClient
from jobly.errors import UnauthorizedError

_bearer = HTTPBearer(auto_error=False)


def get_company_service(storage: StorageClient = Depends(get_storage)) -> CompanyService:
    return CompanyService(storage)


def get_job_service(storage: StorageClient = Depends(get_storage)) -> JobService:
    return JobService(storage)


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> None:
    if not settings.admin_token or credentials is None:
        raise UnauthorizedError()
    if not hmac.compare_digest(credentials.credentials.encode("utf-8"), settings.admin_token.encode("utf-8")):
        raise UnauthorizedError()
