from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".beacon" / "data")
    data_file: str = "app-data.json"

    # file - один JSON-файл, database - снимок в таблице через SQLAlchemy
    storage_backend: Literal["file", "database"] = "file"
    database_url: Optional[str] = None
    sql_echo: bool = False

    autosave_interval: float = Field(15.0, gt=0)
    default_theme: Literal["light", "dark"] = "light"

    export_date_format: str = "%d/%m/%Y"
    export_datetime_format: str = "%d/%m/%Y %H:%M:%S"

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "BEACON_", "extra": "ignore"}

    @property
    def data_path(self) -> Path:
        """Путь к файлу с данными приложения"""
        return self.data_dir / self.data_file

    def resolved_database_url(self) -> str:
        """URL базы данных для хранилища снимков"""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.data_dir / 'beacon.db'}"


settings = Settings()
