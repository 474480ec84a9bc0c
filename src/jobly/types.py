from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

_PAYLOAD_CONFIG = ConfigDict(extra="forbid", str_strip_whitespace=True)


class CompanyCreate(BaseModel):
    model_config = _PAYLOAD_CONFIG

    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str = ""
    num_employees: int | None = Field(default=None, alias="numEmployees", ge=0, strict=True)
    logo_url: str | None = Field(default=None, alias="logoUrl")


class CompanyUpdate(BaseModel):
    model_config = _PAYLOAD_CONFIG

    # Not nullable: an explicit null is rejected, an absent key is left alone.
    name: str = Field(default=None, min_length=1)
    description: str = Field(default=None)
    num_employees: int | None = Field(default=None, alias="numEmployees", ge=0, strict=True)
    logo_url: str | None = Field(default=None, alias="logoUrl")


class JobCreate(BaseModel):
    model_config = _PAYLOAD_CONFIG

    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0, strict=True)
    equity: float | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(BaseModel):
    model_config = _PAYLOAD_CONFIG

    title: str = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0, strict=True)
    equity: float | None = Field(default=None, ge=0, le=1)
