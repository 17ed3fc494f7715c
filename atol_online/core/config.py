from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # АТОЛ Онлайн API
    login: str = ""
    password: str = ""
    group: str = ""
    callback_url: str = ""
    test_mode: bool = True
    prod_endpoint: str = "https://online.atol.ru/possystem/v5"
    test_endpoint: str = "https://testonline.atol.ru/possystem/v5"
    http_timeout: float = 30.0

    # Опрос статуса документа
    poll_retry_count: int = 5
    poll_timeout: float = 1.0

    # Тестовая среда ФФД 1.2
    sandbox_login: str = "v5-online-atol-ru"
    sandbox_password: str = "zUr0OxfI"
    sandbox_group: str = "v5-online-atol-ru_5179"
    sandbox_inn: str = "5544332219"
    sandbox_payment_address: str = "https://v5.online.atol.ru"

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_dir: str = "logs"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ATOL_",
        extra="ignore",
        env_file_encoding="utf-8",
    )


settings = Settings()
