from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    root_path: str = ""
    log_level: str = "INFO"

    # JSON store and its backups live side by side in data_dir.
    data_dir: str = "data"
    store_filename: str = "family-members.json"
    backup_prefix: str = "family-members-backup-"

    # Monarch import script
    monarch_api_base_url: str = "http://localhost:5000"
    monarch_import_file: str = "swedish_monarchs.json"
    http_timeout_seconds: float = 30.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
