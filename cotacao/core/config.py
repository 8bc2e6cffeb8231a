from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

# Stage deadlines in seconds. Each one is started fresh when its stage begins.
CLIENT_TIMEOUT = 0.3
UPSTREAM_TIMEOUT = 0.2
PERSISTENCE_TIMEOUT = 0.01


class Settings(BaseSettings):
    """Settings shared by the quote server and client, loaded from environment.

    Environment variable mapping follows pydantic's rules (e.g., DEBUG, DATA_DIR,
    DB_FILENAME, UPSTREAM_URL, SERVER_URL, ARTIFACT_PATH).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Cotacao"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "exchange_rates.db"
    db_path: Optional[Path] = None  # derived if not provided

    # Upstream exchange rate API
    upstream_url: str = "https://economia.awesomeapi.com.br/json/last/USD-BRL"

    # Server bind
    server_host: str = "0.0.0.0"
    server_port: int = 8080

    # Client side
    server_url: str = "http://localhost:8080/cotacao"
    artifact_path: Path = Path("cotacao.txt")

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
            # Ensure persistence directory exists
            self.data_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
