import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

INSECURE_SECRET_KEYS = {"secreto_por_defecto", "secreto_de_desarrollo_jwt_12345", "changeme"}


class Settings(BaseSettings):
    database_url: str = "sqlite:///./dispatch_desk.db"
    secret_key: str
    environment: str = "development"
    debug: bool = False
    disable_auth: bool = False
    access_token_expire_hours: int = 24
    frontend_url: str | None = None
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:3001"]
    cors_origin_regex: str = r"^https://.*\.(vercel|netlify)\.app$"
    timezone: str = "America/Santo_Domingo"
    admin_username: str = "admin"
    admin_password: str = "admin123"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def validate_environment(config: "Settings") -> list[str]:
    """Check settings that must not leak into production.

    Returns the list of warnings. Raises RuntimeError when any hard error
    is found so the application refuses to start.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if config.secret_key in INSECURE_SECRET_KEYS:
        if config.is_production:
            errors.append("SECRET_KEY uses an insecure default value in production")
        else:
            warnings.append("SECRET_KEY uses a default value (development only)")
    if config.is_production and config.database_url.startswith("sqlite"):
        errors.append("DATABASE_URL must point to a server database in production")
    if config.is_production and config.disable_auth:
        errors.append("DISABLE_AUTH is not allowed in production")

    for warning in warnings:
        logger.warning("Configuration warning: %s", warning)
    if errors:
        for error in errors:
            logger.error("Configuration error: %s", error)
        raise RuntimeError("; ".join(errors))
    return warnings


settings = Settings()
