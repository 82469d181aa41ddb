from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "logistics"
    log_level: str = "INFO"
    init_schema_on_startup: bool = True
    return_ttl_hours: int = 72
    run_ttl_worker: bool = False
    ttl_sweep_interval: float = 60.0
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
