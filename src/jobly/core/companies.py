from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from jobly.core.filters import COMPANY_FILTERS, apply_filters, validate_filters
from jobly.core.sql import ColumnMapper, build_partial_update
from jobly.core.validation import require_valid_payload
from jobly.db.storage import StorageClient
from jobly.errors import DuplicateError, EmptyUpdateError, NotFoundError
from jobly.types import CompanyCreate, CompanyUpdate

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = ColumnMapper({"numEmployees": "num_employees", "logoUrl": "logo_url"})

_COMPANY_FIELDS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


class CompanyService:
    """Companies keyed by their ``handle``."""

    def __init__(self, storage: StorageClient):
        self.storage = storage

    def _name_taken(self, name: str, exclude_handle: str | None = None) -> bool:
        rows = self.storage.execute(
            """SELECT handle
               FROM companies
               WHERE name = $1 AND handle <> $2""",
            [name, exclude_handle or ""],
        )
        return bool(rows)

    def list(self, filter_request: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """Return companies ordered by name, narrowed by ``name``/``minEmployees``/``maxEmployees``."""
        validated = validate_filters(filter_request, COMPANY_FILTERS)
        rows = self.storage.execute(
            f"""SELECT {_COMPANY_FIELDS}
                FROM companies
                ORDER BY name"""
        )
        return [dict(row) for row in apply_filters(rows, validated)]

    def create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Create a company and return ``{handle, name, description, numEmployees, logoUrl}``.

        Raises DuplicateError if the handle or the name is taken.
        """
        if not fields:
            raise EmptyUpdateError("No data")
        data = require_valid_payload(fields, CompanyCreate, include_defaults=True)

        duplicate = self.storage.execute("SELECT handle FROM companies WHERE handle = $1", [data["handle"]])
        if duplicate:
            raise DuplicateError("company", data["handle"])
        if self._name_taken(data["name"]):
            raise DuplicateError("company", data["name"])

        rows = self.storage.execute(
            f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_COMPANY_FIELDS}""",
            [data["handle"], data["name"], data["description"], data["numEmployees"], data["logoUrl"]],
        )
        logger.info("created company %s", data["handle"])
        return rows[0]

    async def get(self, handle: str) -> dict[str, Any]:
        """Return the company with its jobs as ``{..., jobs: [{id, title, salary, equity}]}``."""
        company_rows, job_rows = await asyncio.gather(
            asyncio.to_thread(
                self.storage.execute,
                f"""SELECT {_COMPANY_FIELDS}
                    FROM companies
                    WHERE handle = $1""",
                [handle],
            ),
            asyncio.to_thread(
                self.storage.execute,
                """SELECT id, title, salary, equity
                   FROM jobs
                   WHERE company_handle = $1
                   ORDER BY id""",
                [handle],
            ),
        )
        if not company_rows:
            raise NotFoundError("company", handle)
        return {**company_rows[0], "jobs": job_rows}

    def update(self, handle: str, sparse_update: Mapping[str, Any]) -> dict[str, Any]:
        """Partially update a company; only the fields present are changed.

        Accepts any of ``name``, ``description``, ``numEmployees``, ``logoUrl``.
        """
        if not sparse_update:
            raise EmptyUpdateError("No data")
        data = require_valid_payload(sparse_update, CompanyUpdate)

        new_name = data.get("name")
        if new_name is not None and self._name_taken(new_name, exclude_handle=handle):
            if not self.storage.execute("SELECT handle FROM companies WHERE handle = $1", [handle]):
                raise NotFoundError("company", handle)
            raise DuplicateError("company", new_name)

        clause = build_partial_update(data, COMPANY_COLUMNS)

        rows = self.storage.execute(
            f"""UPDATE companies
                SET {clause.set_clause}
                WHERE handle = {clause.next_placeholder}
                RETURNING {_COMPANY_FIELDS}""",
            [*clause.values, handle],
        )
        if not rows:
            raise NotFoundError("company", handle)
        logger.info("updated company %s fields=%s", handle, list(data))
        return rows[0]

    def remove(self, handle: str) -> None:
        rows = self.storage.execute(
            """DELETE FROM companies
               WHERE handle = $1
               RETURNING handle""",
            [handle],
        )
        if not rows:
            raise NotFoundError("company", handle)
        logger.info("removed company %s", handle)
