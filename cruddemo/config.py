from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from .coaches import COACHES

STORAGE_BACKENDS = ("sql", "memory")
DEFAULT_DB_URL = "sqlite:///./cruddemo.db"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class DbConfig:
    url: str = DEFAULT_DB_URL
    echo: bool = False
    pool_pre_ping: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.url:
            raise ValueError("url must be a non-empty SQLAlchemy database URL")


@dataclass
class AppConfig:
    db: DbConfig = field(default_factory=DbConfig)
    storage: str = "sql"
    api_prefix: str = "/api"
    reject_unknown_patch_fields: bool = False
    coach: str = "cricketCoach"
    another_coach: str = "cricketCoach"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.storage not in STORAGE_BACKENDS:
            raise ValueError(
                f"storage must be one of {', '.join(STORAGE_BACKENDS)}; got {self.storage!r}"
            )
        if not self.api_prefix.startswith("/") or self.api_prefix.endswith("/"):
            raise ValueError(
                f"api_prefix must start with '/' and must not end with '/'; got {self.api_prefix!r}"
            )
        for name in (self.coach, self.another_coach):
            if name not in COACHES:
                raise ValueError(
                    f"Unknown coach qualifier {name!r}; expected one of {', '.join(sorted(COACHES))}"
                )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """
        Build a config from CRUDDEMO_* environment variables.

        Unset variables keep their dataclass defaults.
        """
        env = os.environ if environ is None else environ
        db = DbConfig(url=env.get("CRUDDEMO_DB_URL", DEFAULT_DB_URL))
        kwargs: dict = {"db": db}
        if "CRUDDEMO_STORAGE" in env:
            kwargs["storage"] = env["CRUDDEMO_STORAGE"]
        if "CRUDDEMO_API_PREFIX" in env:
            kwargs["api_prefix"] = env["CRUDDEMO_API_PREFIX"]
        if "CRUDDEMO_REJECT_UNKNOWN_PATCH_FIELDS" in env:
            kwargs["reject_unknown_patch_fields"] = (
                env["CRUDDEMO_REJECT_UNKNOWN_PATCH_FIELDS"].strip().lower() in _TRUE_VALUES
            )
        if "CRUDDEMO_COACH" in env:
            kwargs["coach"] = env["CRUDDEMO_COACH"]
        if "CRUDDEMO_ANOTHER_COACH" in env:
            kwargs["another_coach"] = env["CRUDDEMO_ANOTHER_COACH"]
        return cls(**kwargs)
