"""
Pydantic Validated Models
=========================
Validation layer for rows read from the table store and for settings
read from the environment.

Usage:
    from escala.models.validated import AssignmentRecord

    record = AssignmentRecord.model_validate(row)
    assignment = record.to_assignment()
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from escala.core.calendar import date_to_id, parse_date_id

from .assignment import Assignment
from .period import Period
from .person import Person


def _blank_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


class PersonRecord(BaseModel):
    """A row of the people table."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    name: str
    owner_id: Optional[str] = None

    @field_validator("owner_id", mode="before")
    @classmethod
    def normalize_owner(cls, v):
        return _blank_to_none(v)

    def to_person(self) -> Person:
        return Person(id=self.id, name=self.name, owner_id=self.owner_id)


class AssignmentRecord(BaseModel):
    """A row of the assignments table."""
    model_config = ConfigDict(extra="ignore")

    date: str
    period: Period
    person1_id: Optional[str] = None
    person2_id: Optional[str] = None
    owner_id: Optional[str] = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        """Dates are stored as YYYY-MM-DD and must name a real calendar day."""
        if date_to_id(parse_date_id(v)) != v:
            raise ValueError(f"date must be YYYY-MM-DD, got {v!r}")
        return v

    @field_validator("period", mode="before")
    @classmethod
    def parse_period(cls, v):
        if isinstance(v, Period):
            return v
        return Period.from_string(v)

    @field_validator("person1_id", "person2_id", "owner_id", mode="before")
    @classmethod
    def normalize_empty(cls, v):
        return _blank_to_none(v)

    def to_assignment(self) -> Assignment:
        return Assignment(
            date=self.date,
            period=self.period,
            person1_id=self.person1_id,
            person2_id=self.person2_id,
            owner_id=self.owner_id,
        )


class ValidatedAppConfig(BaseModel):
    """
    Pydantic-validated runtime settings.

    Use this at the environment boundary; convert to the AppConfig
    dataclass for the rest of the application.
    """
    model_config = ConfigDict(validate_assignment=True)

    db_path: str = Field(default="data/escala.db", min_length=1)
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default="logs/escala.log")
    admin_email: Optional[str] = None
    auto_create_schema: bool = True
    start_year: Optional[int] = Field(default=None, ge=1, le=9999)
    start_month: Optional[int] = Field(default=None, ge=0, le=11)

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @field_validator("log_file", "admin_email", mode="before")
    @classmethod
    def blank_is_unset(cls, v):
        return _blank_to_none(v)

    def to_dataclass(self):
        """Convert to the AppConfig dataclass."""
        from escala.config import AppConfig

        return AppConfig(
            db_path=self.db_path,
            log_level=self.log_level,
            log_file=self.log_file,
            admin_email=self.admin_email.lower() if self.admin_email else None,
            auto_create_schema=self.auto_create_schema,
            start_year=self.start_year,
            start_month=self.start_month,
        )
