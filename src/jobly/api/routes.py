from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from jobly.api.deps import get_company_service, get_job_service, require_admin
from jobly.core.companies import CompanyService
from jobly.core.jobs import JobService

companies_router = APIRouter(prefix="/companies", tags=["companies"])
jobs_router = APIRouter(prefix="/jobs", tags=["jobs"])


@companies_router.get("")
def list_companies(request: Request, service: CompanyService = Depends(get_company_service)) -> dict:
    return {"companies": service.list(dict(request.query_params))}


@companies_router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_company(
    payload: dict[str, Any] | None = Body(default=None),
    service: CompanyService = Depends(get_company_service),
) -> dict:
    return {"company": service.create(payload or {})}


@companies_router.get("/{handle}")
async def get_company(handle: str, service: CompanyService = Depends(get_company_service)) -> dict:
    return {"company": await service.get(handle)}


@companies_router.patch("/{handle}", dependencies=[Depends(require_admin)])
def update_company(
    handle: str,
    payload: dict[str, Any] | None = Body(default=None),
    service: CompanyService = Depends(get_company_service),
) -> dict:
    return {"company": service.update(handle, payload or {})}


@companies_router.delete("/{handle}", dependencies=[Depends(require_admin)])
def delete_company(handle: str, service: CompanyService = Depends(get_company_service)) -> dict:
    service.remove(handle)
    return {"deleted": handle}


@jobs_router.get("")
def list_jobs(request: Request, service: JobService = Depends(get_job_service)) -> dict:
    return {"jobs": service.list(dict(request.query_params))}


@jobs_router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_job(
    payload: dict[str, Any] | None = Body(default=None),
    service: JobService = Depends(get_job_service),
) -> dict:
    return {"job": service.create(payload or {})}


@jobs_router.get("/{title}")
def get_job(title: str, service: JobService = Depends(get_job_service)) -> dict:
    return {"job": service.get(title)}


@jobs_router.patch("/{title}", dependencies=[Depends(require_admin)])
def update_job(
    title: str,
    payload: dict[str, Any] | None = Body(default=None),
    service: JobService = Depends(get_job_service),
) -> dict:
    return {"job": service.update(title, payload or {})}


@jobs_router.delete("/{title}", dependencies=[Depends(require_admin)])
def delete_job(title: str, service: JobService = Depends(get_job_service)) -> dict:
    service.remove(title)
    return {"deleted": title}
