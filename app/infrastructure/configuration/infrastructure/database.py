"""Database infrastructure settings."""

from infrastructure.configuration.base import InfrastructureSettings


class DatabaseSettings(InfrastructureSettings):
    """Database connection configuration.

    Environment Variables:
        DATABASE_URL: SQLAlchemy connection URL (default: sqlite:///./http-sms.db)
        DATABASE_ECHO: Echo SQL statements to the log (default: false)
        DATABASE_AUTO_MIGRATE: Create missing tables at startup (default: true)

    Example:
        ```python
        settings = get_settings()
        engine = create_database_engine(settings.database)
        ```
    """

    DATABASE_URL: str = "sqlite:///./http-sms.db"
    DATABASE_ECHO: bool = False
    DATABASE_AUTO_MIGRATE: bool = True
