"""
Integration test fixtures — PostgreSQL testcontainer and schema setup.

Provides a real PostgreSQL instance for each test session via testcontainers.
Creates the two tables the duplicate checker reads, reduced to the
columns it touches. Each test gets a clean database via truncation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import psycopg
import pytest
from testcontainers.postgres import PostgresContainer

DDL = """
CREATE TABLE applications (
    id                  TEXT PRIMARY KEY,
    certificate_number  TEXT,
    verified            BOOLEAN NOT NULL DEFAULT false
);

CREATE TABLE certificates (
    id                  TEXT PRIMARY KEY,
    application_id      TEXT REFERENCES applications(id),
    certificate_number  TEXT NOT NULL
);
"""

TRUNCATE_ALL = """
TRUNCATE certificates, applications CASCADE;
"""


@pytest.fixture(scope="session")
def postgres_container() -> Iterator[PostgresContainer]:
    """Start a PostgreSQL container for the entire test session."""
    with PostgresContainer("postgres:16-alpine") as pg:
        dsn = pg.get_connection_url().replace("postgresql+psycopg2", "postgresql")
        with psycopg.connect(dsn) as conn:
            conn.execute(DDL)
            conn.commit()
        yield pg


@pytest.fixture()
def dsn(postgres_container: PostgresContainer) -> str:
    """Return a psycopg-compatible DSN and truncate all tables before each test."""
    connection_url = postgres_container.get_connection_url().replace(
        "postgresql+psycopg2", "postgresql"
    )
    with psycopg.connect(connection_url) as conn:
        conn.execute(TRUNCATE_ALL)
        conn.commit()
    return connection_url


@pytest.fixture()
def insert_application(dsn: str) -> Callable[..., None]:
    """Insert an applications row."""

    def _insert(app_id: str, certificate_number: str | None, verified: bool = True) -> None:
        with psycopg.connect(dsn) as conn:
            conn.execute(
                "INSERT INTO applications (id, certificate_number, verified) VALUES (%s, %s, %s)",
                (app_id, certificate_number, verified),
            )

    return _insert


@pytest.fixture()
def insert_certificate(dsn: str) -> Callable[..., None]:
    """Insert an issued certificates row."""

    def _insert(cert_id: str, application_id: str | None, certificate_number: str) -> None:
        with psycopg.connect(dsn) as conn:
            conn.execute(
                "INSERT INTO certificates (id, application_id, certificate_number) VALUES (%s, %s, %s)",
                (cert_id, application_id, certificate_number),
            )

    return _insert
