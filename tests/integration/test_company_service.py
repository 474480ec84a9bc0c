import asyncio

import pytest

from jobly.core.companies import CompanyService
from jobly.errors import (
    DuplicateError,
    EmptyUpdateError,
    InvalidFilterError,
    InvalidPayloadError,
    NoMatchError,
    NotFoundError,
)

NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}


def test_create_returns_canonical_shape(storage) -> None:
    service = CompanyService(storage)
    company = service.create(NEW_COMPANY)
    assert company == NEW_COMPANY

    rows = storage.execute(
        "SELECT handle, name, description, num_employees, logo_url FROM companies WHERE handle = $1",
        ["new"],
    )
    assert rows == [
        {
            "handle": "new",
            "name": "New",
            "description": "New Description",
            "num_employees": 1,
            "logo_url": "http://new.img",
        }
    ]


def test_create_duplicate_handle(storage) -> None:
    service = CompanyService(storage)
    service.create(NEW_COMPANY)
    with pytest.raises(DuplicateError):
        service.create(NEW_COMPANY)


def test_create_with_no_fields_never_reaches_storage(storage, monkeypatch) -> None:
    service = CompanyService(storage)
    calls = []
    monkeypatch.setattr(storage, "execute", lambda *args: calls.append(args))
    with pytest.raises(EmptyUpdateError):
        service.create({})
    assert calls == []


def test_create_rejects_bad_payload(storage) -> None:
    with pytest.raises(InvalidPayloadError) as excinfo:
        CompanyService(storage).create({"handle": "x", "name": "X", "numEmployees": -3, "extra": 1})
    assert len(excinfo.value.messages) == 2


def test_list_all_ordered_by_name(storage) -> None:
    companies = CompanyService(storage).list()
    assert [company["handle"] for company in companies] == ["c1", "c2", "c3"]
    assert companies[0] == {
        "handle": "c1",
        "name": "C1",
        "description": "Desc1",
        "numEmployees": 1,
        "logoUrl": "http://c1.img",
    }


def test_list_by_name(storage) -> None:
    companies = CompanyService(storage).list({"name": "c2"})
    assert [company["handle"] for company in companies] == ["c2"]


def test_list_by_name_without_match(storage) -> None:
    with pytest.raises(NoMatchError):
        CompanyService(storage).list({"name": "nope"})


def test_list_by_employee_range(storage) -> None:
    companies = CompanyService(storage).list({"minEmployees": "2", "maxEmployees": "3"})
    assert [company["handle"] for company in companies] == ["c2", "c3"]


def test_list_range_may_be_empty(storage) -> None:
    assert CompanyService(storage).list({"name": "c", "minEmployees": 50}) == []


def test_list_rejects_inverted_range(storage) -> None:
    with pytest.raises(InvalidFilterError):
        CompanyService(storage).list({"minEmployees": 50, "maxEmployees": 10})


def test_get_includes_jobs(storage) -> None:
    company = asyncio.run(CompanyService(storage).get("c1"))
    assert company["handle"] == "c1"
    assert company["numEmployees"] == 1
    assert [(job["title"], job["salary"]) for job in company["jobs"]] == [("mobBoss", 500)]
    assert set(company["jobs"][0]) == {"id", "title", "salary", "equity"}


def test_get_missing(storage) -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(CompanyService(storage).get("nope"))


def test_update_maps_columns(storage) -> None:
    company = CompanyService(storage).update("c1", {"numEmployees": 10, "name": "New"})
    assert company == {
        "handle": "c1",
        "name": "New",
        "description": "Desc1",
        "numEmployees": 10,
        "logoUrl": "http://c1.img",
    }


def test_update_null_fields(storage) -> None:
    company = CompanyService(storage).update("c1", {"numEmployees": None, "logoUrl": None})
    assert company["numEmployees"] is None
    assert company["logoUrl"] is None


def test_update_missing(storage) -> None:
    with pytest.raises(NotFoundError):
        CompanyService(storage).update("nope", {"name": "test"})


def test_update_with_no_data(storage) -> None:
    with pytest.raises(EmptyUpdateError):
        CompanyService(storage).update("c1", {})


def test_update_cannot_change_handle(storage) -> None:
    with pytest.raises(InvalidPayloadError):
        CompanyService(storage).update("c1", {"handle": "c9"})


def test_remove_twice(storage) -> None:
    service = CompanyService(storage)
    service.remove("c1")
    with pytest.raises(NotFoundError):
        asyncio.run(service.get("c1"))
    with pytest.raises(NotFoundError):
        service.remove("c1")
    with pytest.raises(NotFoundError):
        service.remove("c1")


def test_create_duplicate_name(storage) -> None:
    with pytest.raises(DuplicateError) as excinfo:
        CompanyService(storage).create({"handle": "c9", "name": "C1"})
    assert excinfo.value.key == "C1"
    assert storage.execute("SELECT handle FROM companies WHERE handle = $1", ["c9"]) == []


def test_update_onto_another_company_name(storage) -> None:
    service = CompanyService(storage)
    with pytest.raises(DuplicateError):
        service.update("c2", {"name": "C1"})
    assert asyncio.run(service.get("c2"))["name"] == "C2"


def test_update_keeping_own_name(storage) -> None:
    company = CompanyService(storage).update("c1", {"name": "C1", "description": "Same name"})
    assert company["name"] == "C1"
    assert company["description"] == "Same name"


def test_update_missing_company_onto_taken_name(storage) -> None:
    with pytest.raises(NotFoundError):
        CompanyService(storage).update("nope", {"name": "C1"})


def test_remove_cascades_to_jobs(storage) -> None:
    CompanyService(storage).remove("c1")
    rows = storage.execute("SELECT title, company_handle FROM jobs ORDER BY id")
    assert [row["company_handle"] for row in rows] == ["c2", "c3"]


class _FailingJobsStorage:
    def __init__(self, inner):
        self.inner = inner

    def execute(self, statement, values=()):
        if "FROM jobs" in statement:
            raise RuntimeError("jobs query failed")
        return self.inner.execute(statement, values)


def test_get_fails_when_jobs_query_fails(storage) -> None:
    service = CompanyService(_FailingJobsStorage(storage))
    result = None
    with pytest.raises(RuntimeError, match="jobs query failed"):
        result = asyncio.run(service.get("c1"))
    assert result is None
