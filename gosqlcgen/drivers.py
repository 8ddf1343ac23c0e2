"""SQL packages and drivers that generated code can target."""

from __future__ import annotations

from enum import Enum


class ConfigError(ValueError):
    """Raised when generator configuration is invalid."""


SQL_PACKAGE_PGX_V4 = "pgx/v4"
SQL_PACKAGE_PGX_V5 = "pgx/v5"
SQL_PACKAGE_STANDARD = "database/sql"

VALID_PACKAGES = frozenset({SQL_PACKAGE_PGX_V4, SQL_PACKAGE_PGX_V5, SQL_PACKAGE_STANDARD})


class SQLDriver(str, Enum):
    """A database driver, identified by its import path."""

    PGX_V4 = "github.com/jackc/pgx/v4"
    PGX_V5 = "github.com/jackc/pgx/v5"
    LIB_PQ = "github.com/lib/pq"
    GO_SQL_DRIVER_MYSQL = "github.com/go-sql-driver/mysql"

    def is_pgx(self) -> bool:
        return self in (SQLDriver.PGX_V4, SQLDriver.PGX_V5)

    def is_go_sql_driver_mysql(self) -> bool:
        return self is SQLDriver.GO_SQL_DRIVER_MYSQL

    def package(self) -> str:
        if self is SQLDriver.PGX_V4:
            return SQL_PACKAGE_PGX_V4
        if self is SQLDriver.PGX_V5:
            return SQL_PACKAGE_PGX_V5
        return SQL_PACKAGE_STANDARD


def validate_package(sql_package: str) -> None:
    """Raise ConfigError unless the SQL package is a known one."""
    if sql_package not in VALID_PACKAGES:
        raise ConfigError(f"unknown SQL package: {sql_package}")


def validate_driver(sql_driver: str) -> None:
    """Raise ConfigError unless the SQL driver is a known one."""
    if sql_driver not in {d.value for d in SQLDriver}:
        raise ConfigError(f"unknown SQL driver: {sql_driver}")


def parse_driver(sql_package: str) -> SQLDriver:
    """Map an SQL package name to the driver it implies."""
    if sql_package == SQL_PACKAGE_PGX_V4:
        return SQLDriver.PGX_V4
    if sql_package == SQL_PACKAGE_PGX_V5:
        return SQLDriver.PGX_V5
    return SQLDriver.LIB_PQ