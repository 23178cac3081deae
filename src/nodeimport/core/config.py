# src/nodeimport/core/config.py

from typing import Optional

import keyring
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

KEYRING_SERVICE = "nodeimport"


class Settings(BaseSettings):
    # Destination content store
    database_url: Optional[str] = Field(default=None)
    db_user: str = "nodeimport_app"
    db_password: Optional[str] = Field(default=None)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "nodeimport_db"

    # Legacy (read-only) source
    legacy_db_url: Optional[str] = Field(default=None)
    legacy_db_user: str = "legacy_reader"
    legacy_db_password: Optional[str] = Field(default=None)
    legacy_db_host: str = "localhost"
    legacy_db_port: int = 5432
    legacy_db_name: str = "legacy_db"

    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
    )

    def get_secure_value(self, key: str, default=None):
        attr_name = key.lower()
        try:
            secure = keyring.get_password(KEYRING_SERVICE, key)
            return secure or getattr(self, attr_name, default)
        except Exception:
            return getattr(self, attr_name, default)

    def build_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        password = self.get_secure_value("db_password")
        return _postgres_url(self.db_user, password, self.db_host, self.db_port, self.db_name)

    def build_legacy_url(self) -> str:
        if self.legacy_db_url:
            return self.legacy_db_url
        password = self.get_secure_value("legacy_db_password")
        return _postgres_url(
            self.legacy_db_user, password, self.legacy_db_host, self.legacy_db_port, self.legacy_db_name
        )


def _postgres_url(user: str, password: Optional[str], host: str, port: int, name: str) -> str:
    url = URL.create(
        "postgresql",
        username=user,
        password=password or None,
        host=host,
        port=port,
        database=name,
    )
    # URL.__str__ masks the password
    return url.render_as_string(hide_password=False)


# Instantiate settings
settings = Settings()
