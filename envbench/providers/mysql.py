"""
MySQL connection provider for the database benchmarks.
Requires the optional PyMySQL driver (``pip install envbench[mysql]``).
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..benchmark.base import ResourceUnavailableError
from ..config import RunConfiguration
from .base import BaseResource

try:
    import pymysql
except ImportError:
    pymysql = None

logger = logging.getLogger(__name__)


@dataclass
class MySQLDatabase:
    """Handle given to database benchmark cases."""
    connection: Any
    database: str
    table: str
    server_version: str = ""

    def execute(self, sql: str, args: Any = None) -> int:
        """Run one statement and discard any result set."""
        with self.connection.cursor() as cursor:
            return cursor.execute(sql, args)


class MySQLProvider(BaseResource):
    """
    MySQL database with a scratch table seeded with rows.

    Configuration (from RunConfiguration):
        - mysql_host / mysql_port or mysql_socket
        - mysql_user / mysql_password: required
        - mysql_database: created if missing
        - mysql_table: scratch table, dropped on release
    """

    name = "mysql"
    display_name = "Mysql"

    INITIAL_ROW_COUNT = 1000

    def __init__(
        self,
        config: RunConfiguration,
        connect: Optional[Callable[..., Any]] = None,
    ):
        """
        Args:
            config: Resolved run configuration
            connect: Connection factory (default: ``pymysql.connect``)
        """
        super().__init__()
        self.config = config
        self._connect = connect

    def _connection_factory(self) -> Callable[..., Any]:
        if self._connect is not None:
            return self._connect
        if pymysql is None:
            raise ResourceUnavailableError("The PyMySQL driver is not installed")
        return pymysql.connect

    def _acquire(self) -> MySQLDatabase:
        config = self.config
        connect = self._connection_factory()

        if config.mysql_host is None or config.mysql_user is None or config.mysql_password is None:
            raise ResourceUnavailableError("Missing: mysql_host, mysql_user, mysql_password")

        try:
            connection = connect(
                host=config.mysql_host,
                user=config.mysql_user,
                password=config.mysql_password,
                port=config.mysql_port,
                unix_socket=config.mysql_socket,
                autocommit=True,
            )
        except Exception as e:
            raise ResourceUnavailableError(f"Mysql Connect Error {e}")

        db = MySQLDatabase(
            connection=connection,
            database=config.mysql_database,
            table=config.mysql_table,
            server_version=getattr(connection, "server_version", "") or "",
        )

        try:
            self._prepare(db)
        except Exception as e:
            connection.close()
            raise ResourceUnavailableError(f"Mysql Error {e}")

        logger.info(f"Mysql scratch table ready: {db.database}.{db.table}")
        return db

    def _prepare(self, db: MySQLDatabase) -> None:
        """Create the database if needed, then the seeded scratch table."""
        with db.connection.cursor() as cursor:
            found = cursor.execute(
                "SELECT schema_name FROM information_schema.schemata WHERE schema_name = %s",
                (db.database,),
            )
            if not found:
                cursor.execute(f"CREATE DATABASE IF NOT EXISTS `{db.database}`")

        db.connection.select_db(db.database)
        db.execute(
            f"CREATE TABLE IF NOT EXISTS `{db.database}`.`{db.table}` "
            "(id INT PRIMARY KEY AUTO_INCREMENT, name VARCHAR(255))"
        )

        values = ",".join(f"('test{i}')" for i in range(self.INITIAL_ROW_COUNT))
        db.execute(f"INSERT INTO `{db.database}`.`{db.table}` (name) VALUES {values}")

    def _release(self, handle: MySQLDatabase) -> None:
        try:
            handle.execute(f"DROP TABLE IF EXISTS `{handle.database}`.`{handle.table}`")
        finally:
            handle.connection.close()

    def describe(self) -> str:
        if not self.available:
            return "disabled"
        return f"enabled v{self._handle.server_version}"
