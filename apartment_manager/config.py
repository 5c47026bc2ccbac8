"""Application settings."""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Where the three flat-file stores live
    data_dir: Path = Path(".")
    apartments_file: str = "apartments.dat"
    accounts_file: str = "users.dat"
    parking_file: str = "parking_lots.dat"

    log_level: str = "INFO"
    window_title: str = "Apartment Management System"

    model_config = SettingsConfigDict(
        env_prefix="APTMGR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def apartments_path(self) -> Path:
        return self.data_dir / self.apartments_file

    @property
    def accounts_path(self) -> Path:
        return self.data_dir / self.accounts_file

    @property
    def parking_path(self) -> Path:
        return self.data_dir / self.parking_file


@lru_cache()
def get_settings() -> Settings:
    return Settings()
