from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    COHERE_API_KEY: str | None = None
    CLICKHOUSE_HOST: str | None = None
    CLICKHOUSE_PORT: int = 8443
    CLICKHOUSE_PROTOCOL: str = "https://"
    CLICKHOUSE_USERNAME: str = "default"
    CLICKHOUSE_PASSWORD: str = ""
    CLICKHOUSE_DATABASE: str = "default"
    CLICKHOUSE_TABLE: str = "vector_table"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
