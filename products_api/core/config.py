from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Union
import os
import json


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=f"config/{os.getenv('ENV', 'local')}.env",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = "sqlite+aiosqlite:///./products.db"
    log_level: str = "INFO"
    environment: str = "local"
    host: str = "0.0.0.0"
    port: int = 8080
    # CORS origins - can be JSON array or comma-separated string
    cors_origins: Union[List[str], str] = ["*"]
    db_pool_size: int = 10
    db_max_overflow: int = 20
    # Swagger UI / ReDoc are served for local environments unless forced on
    docs_enabled: bool = False

    @property
    def serve_docs(self) -> bool:
        return self.docs_enabled or self.environment == "local"

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        if isinstance(self.cors_origins, str):
            try:
                origins = json.loads(self.cors_origins)
            except (json.JSONDecodeError, ValueError):
                # Comma-separated
                origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        else:
            origins = self.cors_origins

        return origins if isinstance(origins, list) else [origins]


settings = Settings()
