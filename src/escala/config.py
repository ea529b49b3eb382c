"""Runtime configuration for the Escala application."""
import os
from dataclasses import asdict, dataclass
from typing import Mapping, Optional

ENV_PREFIX = "ESCALA_"


@dataclass
class AppConfig:
    """Settings read once per process and shared by the UI and the CLI."""

    # Storage
    db_path: str = "data/escala.db"
    auto_create_schema: bool = True  # False: a missing table is reported, not created

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/escala.log"

    # Access: when set, only this account may change the roster
    admin_email: Optional[str] = None

    # Initial month shown; None follows target_month_info()
    start_year: Optional[int] = None
    start_month: Optional[int] = None  # zero-based

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Mapping) -> "AppConfig":
        """Create from a dictionary, validating every field."""
        from escala.models.validated import ValidatedAppConfig

        known = {k: v for k, v in d.items() if k in cls.__dataclass_fields__ and v is not None}
        return ValidatedAppConfig(**known).to_dataclass()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Read ESCALA_* variables, e.g. ESCALA_DB_PATH, ESCALA_ADMIN_EMAIL,
        ESCALA_LOG_LEVEL, ESCALA_AUTO_CREATE_SCHEMA=0, ESCALA_START_MONTH=0.

        Raises:
            pydantic.ValidationError: a variable has an invalid value
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.__dataclass_fields__:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw
        return cls.from_dict(values)
