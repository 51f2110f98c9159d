"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "campus-dashboard"
    log_level: str = "INFO"

    # Simulated fetch latency per query key, in milliseconds
    students_latency_ms: int = 200
    stock_latency_ms: int = 220
    employees_latency_ms: int = 180
    investment_latency_ms: int = 190
    activity_latency_ms: int = 160

    # Mock authentication
    login_delay_ms: int = 600

    # Derivations
    pos_tax_rate: float = 0.0825
    recent_activity_limit: int = 12

    # CSV export
    csv_line_terminator: str = "\n"

    def latency_for(self, key: str) -> float:
        """Artificial delay in seconds for a query key (0 for unknown keys)"""
        return getattr(self, f"{key}_latency_ms", 0) / 1000


settings = Settings()
