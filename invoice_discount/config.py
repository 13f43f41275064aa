from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "invoice_discount"
    debug: bool = False
    log_level: str = "INFO"
    seed_line_count: int = 3
    session_cookie_name: str = "discount_session"
    session_max_count: int = 1000
    session_idle_seconds: int = 3600
    currency_symbol: str = "€"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="")


settings = Settings()
