from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central settings object.
    Production provides env vars; locally you can use backend/.env.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Canopy (Amazon product search)
    CANOPY_API_KEY: str = ""
    CANOPY_BASE_URL: str = ""
    CANOPY_AUTH_HEADER_NAME: str = "Authorization"

    # Upstream search
    SEARCH_TERM: str = "gaming desktop computer PC"
    SEARCH_LIMIT: int = 40
    SEARCH_TIMEOUT_SECONDS: float = 15.0

    # Ranking
    RECOMMEND_LIMIT: int = 5
    BUDGET_TOLERANCE: float = 0.12
    STRICT_STORAGE: bool = False

    LOG_LEVEL: str = "INFO"

    # Versioning
    APP_VERSION: str = "0.1.0"
    BUILD_ID: str = "dev"


settings = Settings()


def get_settings() -> Settings:
    return settings
