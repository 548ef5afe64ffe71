"""Database URL assembly for environments that configure the DB in parts"""
from sqlalchemy.engine import URL


def get_database_url(
    driver: str,
    host: str | None,
    port: int | None,
    user: str | None,
    password: str | None,
    name: str | None,
) -> str:
    """
    Construct a database URL from components, escaping the credentials.

    Example:
        >>> get_database_url("postgresql+asyncpg", "db", 5432, "inv", "p@ss", "inventory")
        'postgresql+asyncpg://inv:p%40ss@db:5432/inventory'
    """
    url = URL.create(
        drivername=driver,
        username=user,
        password=password,
        host=host,
        port=port,
        database=name,
    )
    return url.render_as_string(hide_password=False)
