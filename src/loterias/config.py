"""Runtime settings, overridable through ``LOTERIAS_*`` env vars or a .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LOTERIAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Draw history source: one JSON array per game, named <game-key>.json
    DATA_BASE_URL: str = "https://raw.githubusercontent.com/eitchtee/loterias.json/refs/heads/main/data"
    HTTP_TIMEOUT: float = 15.0
    USER_AGENT: str = "loterias-unique/0.1 (+https://github.com/eitchtee/loterias.json)"

    LOG_LEVEL: str = "INFO"

    def history_url(self, game_key: str) -> str:
        return f"{self.DATA_BASE_URL.rstrip('/')}/{game_key}.json"


settings = Settings()
