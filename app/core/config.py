from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "memory"
    DATA_DIR: str = "./data/records"

    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    SUPABASE_TIMEOUT_SECONDS: float = 10.0

    CORS_ALLOW_ORIGIN: str = "*"
    CORS_ALLOW_HEADERS: str = "authorization, x-client-info, apikey, content-type, x-user-id"


settings = Settings()
