from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_path: Path = Path(__file__).resolve().parent.parent / "movies.db"
    db_timeout: float = 5.0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = {"env_prefix": "MOVIES_API_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
