from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "AMORTIZER_"}

    # Decimal arithmetic
    working_precision: int = 28  # Minimum significant digits for intermediate values
    currency_places: int = 2
    default_rounding: str = "ROUND_HALF_UP"

    # Upper bounds on work per schedule
    max_schedule_periods: int = 12_000  # 1000 years of monthly payments
    max_working_precision: int = 200  # Decimal digits

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
