from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "dev"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8020

    # Records backend, every endpoint lives under {API_BASE_URL}/api
    API_BASE_URL: str = "http://localhost:3001"
    HTTP_CONNECT_TIMEOUT: float = 5
    HTTP_READ_TIMEOUT: float = 25

    SESSION_BACKEND: str = "file"  # file | redis | memory
    SESSION_FILE: str = ".edudesk_session.json"
    SESSION_KEY: str = "user"
    REDIS_URL: str = "redis://localhost:6379/5"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
