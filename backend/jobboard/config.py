from pathlib import Path
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    data_dir: Path = Path.home() / "JobBoard"
    city_data_path: Path = PACKAGE_DIR / "data" / "us_cities.csv"
    api_prefix: str = "/api/v1"

    default_job_limit: int = 20
    default_installer_limit: int = 12
    max_limit: int = 50
    max_page: int = 10_000
    # Radius search loads every non-geographic match into memory; bound it.
    max_radius_candidates: int = 2_000

    opencage_api_key: str | None = None
    geocode_url: str = "https://api.opencagedata.com/geocode/v1/json"
    geocode_timeout_seconds: float = 10.0

    @property
    def db_path(self) -> Path:
        return self.data_dir / "jobboard.sqlite"

    model_config = {"env_prefix": "JOBBOARD_"}


settings = Settings()
