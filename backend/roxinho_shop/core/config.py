from urllib.parse import urlparse

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    db_name: str = "roxinho_shop"
    db_user: str = "shop"
    db_password: str = "CHANGE_ME"
    db_host: str = "db"
    db_port: int = 5432
    db_ssl: bool = False
    db_pool_size: int = 10
    db_statement_timeout_ms: int = 30000

    # CORS
    cors_allowed_origins: str = "http://localhost:3000,https://roxinho-shop.vercel.app"

    # HTTP hardening
    max_request_body_bytes: int = 64 * 1024
    hsts_max_age_seconds: int = 31536000

    # JWT (tokens are issued by the identity service, verified here)
    jwt_secret_key: str = "CHANGE_ME"

    # Product scraper
    scraper_timeout_seconds: float = 10.0
    scraper_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    )
    mercadolivre_api_base: str = "https://api.mercadolibre.com"
    placeholder_image_url: str = "https://via.placeholder.com/400?text=Product"

    # App
    debug: bool = False
    log_level: str = "INFO"
    app_version: str = "1.0.0"
    frontend_url: str = "https://roxinho-shop.vercel.app"

    @property
    def database_url(self) -> str:
        base = (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )
        return f"{base}?ssl=require" if self.db_ssl else base

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "extra": "ignore"}

    def validate_secrets(self) -> None:
        """Raise if production-critical secrets are still defaults."""
        if self.debug:
            return
        defaults = {"CHANGE_ME"}
        if self.jwt_secret_key in defaults:
            raise ValueError("jwt_secret_key must be changed from default")
        if len(self.jwt_secret_key) < 32:
            raise ValueError(
                "jwt_secret_key must be at least 32 characters (256 bits) per RFC 7518 Section 3.2"
            )
        parsed = urlparse(self.frontend_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("frontend_url must be a valid http(s) URL")
        if self.db_password in defaults:
            raise ValueError("db_password must be changed from default")
        if self.scraper_timeout_seconds <= 0:
            raise ValueError("scraper_timeout_seconds must be positive")


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings object."""
    return settings
