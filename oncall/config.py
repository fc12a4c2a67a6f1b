"""
Settings for the on-call tools, read from ONCALL_* environment variables
or a local .env file.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rota import DEFAULT_ROTA_CSV_URL
from .updates import DEFAULT_INSTALLER_MODULE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ONCALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Rota ===
    rota_csv_url: str = Field(
        default=DEFAULT_ROTA_CSV_URL,
        description="CSV export URL of the rota spreadsheet",
    )
    http_timeout: float = Field(default=10.0, gt=0, description="Seconds to wait for the rota export")

    # === Contacts ===
    contacts_dir: Path = Field(
        default=Path("contacts"),
        description="Directory of .vcf files making up the address book",
    )
    whatsapp_country_code: str = Field(default="44", description="Replaces a leading 0 in wa.me links")
    promote_picker_selection: bool = Field(
        default=True,
        description="Move the contact picked for a partial match to the front of the result",
    )

    # === Updates ===
    installer_module: str = Field(default=DEFAULT_INSTALLER_MODULE)
    update_url: str = Field(default="scriptable:///run/QERota_Installer")

    # === Widget ===
    widget_url: str = Field(default="/contact", description="Where tapping the widget leads")

    log_level: str = Field(default="INFO")

    @field_validator("whatsapp_country_code")
    @classmethod
    def _digits_only(cls, v: str) -> str:
        v = v.strip().lstrip("+")
        if not v.isdigit():
            raise ValueError("whatsapp_country_code must be digits, e.g. 44")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
