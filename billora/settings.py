from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="BILLORA_", extra="ignore")

    storage_backend: str = "local"
    storage_local_path: str = "./data"
    storage_key: str = "billing_data"
    storage_prefix: str = "invoices"

    currency_code: str = "BDT"
    currency_name: str = "Taka"

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
