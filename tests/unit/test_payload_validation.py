from jobly.core.validation import validate_payload
from jobly.types import CompanyCreate, CompanyUpdate, JobCreate, JobUpdate


def test_valid_update_keeps_caller_key_order() -> None:
    result = validate_payload({"logoUrl": "http://x.img", "name": "New"}, CompanyUpdate)
    assert result.valid
    assert list(result.data) == ["logoUrl", "name"]


def test_unknown_keys_are_rejected() -> None:
    result = validate_payload({"name": "New", "handle": "other"}, CompanyUpdate)
    assert not result.valid
    assert any(error.startswith("handle") for error in result.errors)


def test_snake_case_company_fields_are_rejected() -> None:
    result = validate_payload({"num_employees": 3}, CompanyUpdate)
    assert not result.valid


def test_salary_must_be_an_integer() -> None:
    result = validate_payload(
        {"title": "new JOB", "salary": "455", "equity": 0.3, "company_handle": "c3"},
        JobCreate,
    )
    assert not result.valid
    assert len(result.errors) == 1
    assert result.errors[0].startswith("salary")


def test_equity_is_bounded() -> None:
    result = validate_payload({"equity": 1.5}, JobUpdate)
    assert not result.valid


def test_create_defaults_follow_sent_fields() -> None:
    result = validate_payload({"name": "Acme", "handle": "acme"}, CompanyCreate, include_defaults=True)
    assert result.valid
    assert result.data == {
        "name": "Acme",
        "handle": "acme",
        "description": "",
        "numEmployees": None,
        "logoUrl": None,
    }
    assert list(result.data)[:2] == ["name", "handle"]


def test_explicit_null_title_is_rejected() -> None:
    result = validate_payload({"title": None}, JobUpdate)
    assert not result.valid


def test_non_mapping_payload_is_invalid() -> None:
    result = validate_payload(["title"], JobUpdate)  # type: ignore[arg-type]
    assert not result.valid
    assert result.errors == ["payload must be an object"]
