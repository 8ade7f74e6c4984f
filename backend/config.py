from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    firebase_credentials_path: str = ""
    storage_bucket: str = ""
    signed_url_expiration_minutes: int = 60
    workers_collection: str = "workers"
    default_radius_km: float = 10.0
    default_search_limit: int = 100
    bounding_box_prefilter: bool = True
    catalog_read_timeout_seconds: float = 10.0
    default_worker_label: str = "Worker"
    default_currency: str = "GNF"
    log_level: str = "INFO"

    model_config = {"env_prefix": "WORKERS_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
