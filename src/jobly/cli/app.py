from __future__ import annotations

import asyncio
import json
from typing import Any, NoReturn

import typer
import uvicorn

from jobly.api.app import create_app
from jobly.config import get_settings
from jobly.core.companies import CompanyService
from jobly.core.jobs import JobService
from jobly.db.init import init_database
from jobly.db.session import engine
from jobly.db.storage import StorageClient
from jobly.errors import JoblyError
from jobly.logging_config import configure_logging

app = typer.Typer(help="Jobly CLI")
companies_app = typer.Typer(help="Manage companies")
jobs_app = typer.Typer(help="Manage job postings")

app.add_typer(companies_app, name="companies")
app.add_typer(jobs_app, name="jobs")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


def _storage() -> StorageClient:
    configure_logging()
    ensure_initialized()
    return StorageClient(engine)


def _echo(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


def _fail(exc: JoblyError) -> NoReturn:
    typer.echo(json.dumps({"error": {"message": exc.message, "status": exc.status_code}}, indent=2), err=True)
    raise typer.Exit(code=1)


def _filters(**values: Any) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@app.command("init")
def init_cmd(seed: bool = typer.Option(False, "--seed", help="Load sample companies and jobs")) -> None:
    """Initialize the database schema."""
    configure_logging()
    result = init_database(seed=seed)
    _echo({"ok": True, **result})


@companies_app.command("list")
def companies_list(
    name: str | None = typer.Option(None, "--name"),
    min_employees: int | None = typer.Option(None, "--min-employees"),
    max_employees: int | None = typer.Option(None, "--max-employees"),
) -> None:
    service = CompanyService(_storage())
    try:
        rows = service.list(_filters(name=name, minEmployees=min_employees, maxEmployees=max_employees))
    except JoblyError as exc:
        _fail(exc)
    _echo(rows)


@companies_app.command("show")
def companies_show(handle: str = typer.Argument(...)) -> None:
    service = CompanyService(_storage())
    try:
        company = asyncio.run(service.get(handle))
    except JoblyError as exc:
        _fail(exc)
    _echo(company)


@companies_app.command("create")
def companies_create(
    handle: str = typer.Option(..., "--handle"),
    name: str = typer.Option(..., "--name"),
    description: str = typer.Option("", "--description"),
    num_employees: int | None = typer.Option(None, "--num-employees"),
    logo_url: str | None = typer.Option(None, "--logo-url"),
) -> None:
    service = CompanyService(_storage())
    fields = _filters(
        handle=handle,
        name=name,
        description=description,
        numEmployees=num_employees,
        logoUrl=logo_url,
    )
    try:
        company = service.create(fields)
    except JoblyError as exc:
        _fail(exc)
    _echo(company)


@companies_app.command("remove")
def companies_remove(handle: str = typer.Argument(...)) -> None:
    service = CompanyService(_storage())
    try:
        service.remove(handle)
    except JoblyError as exc:
        _fail(exc)
    _echo({"deleted": handle})


@jobs_app.command("list")
def jobs_list(
    title: str | None = typer.Option(None, "--title"),
    min_salary: int | None = typer.Option(None, "--min-salary"),
    has_equity: bool | None = typer.Option(None, "--has-equity/--any-equity"),
) -> None:
    service = JobService(_storage())
    try:
        rows = service.list(_filters(title=title, minSalary=min_salary, hasEquity=has_equity))
    except JoblyError as exc:
        _fail(exc)
    _echo(rows)


@jobs_app.command("show")
def jobs_show(title: str = typer.Argument(...)) -> None:
    service = JobService(_storage())
    try:
        job = service.get(title)
    except JoblyError as exc:
        _fail(exc)
    _echo(job)


@jobs_app.command("create")
def jobs_create(
    title: str = typer.Option(..., "--title"),
    company_handle: str = typer.Option(..., "--company"),
    salary: int | None = typer.Option(None, "--salary"),
    equity: float | None = typer.Option(None, "--equity"),
) -> None:
    service = JobService(_storage())
    fields = _filters(title=title, salary=salary, equity=equity, company_handle=company_handle)
    try:
        job = service.create(fields)
    except JoblyError as exc:
        _fail(exc)
    _echo(job)


@jobs_app.command("remove")
def jobs_remove(title: str = typer.Argument(...)) -> None:
    service = JobService(_storage())
    try:
        service.remove(title)
    except JoblyError as exc:
        _fail(exc)
    _echo({"deleted": title})


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    log_level: str | None = typer.Option(None, "--log-level", help="Overrides LOG_LEVEL, e.g. DEBUG to log SQL"),
) -> None:
    configure_logging(log_level)
    ensure_initialized()
    settings = get_settings()
    app_instance = create_app()
    uvicorn.run(app_instance, host=host or settings.app_host, port=port or settings.app_port)
