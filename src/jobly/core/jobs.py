from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from jobly.core.filters import JOB_FILTERS, apply_filters, validate_filters
from jobly.core.sql import ColumnMapper, build_partial_update
from jobly.core.validation import require_valid_payload
from jobly.db.storage import StorageClient
from jobly.errors import DuplicateError, EmptyUpdateError, InvalidPayloadError, NotFoundError
from jobly.types import JobCreate, JobUpdate

logger = logging.getLogger(__name__)

# Job fields are stored under their external names.
JOB_COLUMNS = ColumnMapper({})

_JOB_FIELDS = "id, title, salary, equity, company_handle"


class JobService:
    """Jobs keyed by their title, compared case-insensitively."""

    def __init__(self, storage: StorageClient):
        self.storage = storage

    def _find(self, title: str) -> list[dict[str, Any]]:
        return self.storage.execute(
            f"""SELECT {_JOB_FIELDS}
                FROM jobs
                WHERE LOWER(title) = LOWER($1)""",
            [title],
        )

    def list(self, filter_request: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """Return jobs narrowed by ``title``/``minSalary``/``hasEquity``.

        Title searches are ordered by title, everything else by creation order.
        """
        validated = validate_filters(filter_request, JOB_FILTERS)
        order_by = "title" if validated.get("title") else "id"
        rows = self.storage.execute(
            f"""SELECT {_JOB_FIELDS}
                FROM jobs
                ORDER BY {order_by}"""
        )
        return [dict(row) for row in apply_filters(rows, validated)]

    def create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Create a job and return ``{id, title, salary, equity, company_handle}``.

        Raises DuplicateError if a job with the same title exists and
        InvalidPayloadError if ``company_handle`` names no company.
        """
        if not fields:
            raise EmptyUpdateError("No data")
        data = require_valid_payload(fields, JobCreate, include_defaults=True)

        if self._find(data["title"]):
            raise DuplicateError("job", data["title"])
        company = self.storage.execute("SELECT handle FROM companies WHERE handle = $1", [data["company_handle"]])
        if not company:
            raise InvalidPayloadError([f"company_handle: no company with handle '{data['company_handle']}'"])

        rows = self.storage.execute(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {_JOB_FIELDS}""",
            [data["title"], data["salary"], data["equity"], data["company_handle"]],
        )
        logger.info("created job %r for %s", data["title"], data["company_handle"])
        return rows[0]

    def get(self, title: str) -> dict[str, Any]:
        rows = self._find(title)
        if not rows:
            raise NotFoundError("job", title)
        return rows[0]

    def update(self, title: str, sparse_update: Mapping[str, Any]) -> dict[str, Any]:
        """Change the given fields of a job and return its ``{title, salary, equity}``.

        Fields absent from ``sparse_update`` keep their stored value, including
        falsy ones such as a salary of 0.
        """
        if not sparse_update:
            raise EmptyUpdateError("No data")
        data = require_valid_payload(sparse_update, JobUpdate)

        new_title = data.get("title")
        if new_title is not None and new_title.lower() != title.lower() and self._find(new_title):
            if not self._find(title):
                raise NotFoundError("job", title)
            raise DuplicateError("job", new_title)

        clause = build_partial_update(data, JOB_COLUMNS)
        rows = self.storage.execute(
            f"""UPDATE jobs
                SET {clause.set_clause}
                WHERE LOWER(title) = LOWER({clause.next_placeholder})
                RETURNING title, salary, equity""",
            [*clause.values, title],
        )
        if not rows:
            raise NotFoundError("job", title)
        logger.info("updated job %r fields=%s", title, list(data))
        return rows[0]

    def remove(self, title: str) -> None:
        rows = self.storage.execute(
            """DELETE FROM jobs
               WHERE LOWER(title) = LOWER($1)
               RETURNING title""",
            [title],
        )
        if not rows:
            raise NotFoundError("job", title)
        logger.info("removed job %r", title)
