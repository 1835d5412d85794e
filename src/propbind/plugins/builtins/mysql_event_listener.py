"""Configuration of the MySQL event listener."""

from __future__ import annotations

import re
from typing import Annotated
from urllib.parse import parse_qsl, urlsplit

from pydantic import Field

from propbind.binding import ConfigModel, NotNull, Property, Sensitive, constraint

# Schemes accepted by MySQL Connector/J.
_MYSQL_URL = re.compile(
    r"^(?:jdbc:mysql(?:\+srv)?:(?:loadbalance:|replication:)?|mysqlx(?:\+srv)?:)//",
    re.IGNORECASE,
)


def url_credentials(url: str) -> frozenset[str]:
    """Return which of ``user``/``password`` a JDBC URL already carries."""
    parts = urlsplit(url.removeprefix("jdbc:"))
    names = {name.lower() for name, _ in parse_qsl(parts.query, keep_blank_values=True)}
    if parts.username:
        names.add("user")
    if parts.password is not None:
        names.add("password")
    return frozenset(names & {"user", "password"})


class MysqlEventListenerConfig(ConfigModel):
    """``mysql-event-listener.*`` properties."""

    url: Annotated[
        str | None,
        Property("mysql-event-listener.db.url"),
        Sensitive(),
        NotNull(),
        Field(description="JDBC URL of the MySQL database receiving query events"),
    ] = None
    user: Annotated[
        str | None,
        Property("mysql-event-listener.db.user"),
        Field(description="Database user, when not part of the JDBC URL"),
    ] = None
    password: Annotated[
        str | None,
        Property("mysql-event-listener.db.password"),
        Sensitive(),
        Field(description="Database password, when not part of the JDBC URL"),
    ] = None
    prune_columns: Annotated[
        tuple[str, ...],
        Property("mysql-event-listener.db.prune-columns"),
        Field(
            description=(
                "List of columns to prune from the event data. "
                "Comma-separated list of column names."
            )
        ),
    ] = ()

    @constraint("Invalid JDBC URL for MySQL event listener", fields=("url",))
    def is_valid_url(self) -> bool:
        if self.url is None:
            return True
        return _MYSQL_URL.match(self.url) is not None

    @constraint(
        "Database user is specified twice: in the JDBC URL and in mysql-event-listener.db.user",
        fields=("url", "user"),
    )
    def is_user_specified_once(self) -> bool:
        if self.url is None or self.user is None:
            return True
        return "user" not in url_credentials(self.url)

    @constraint(
        "Database password is specified twice: in the JDBC URL and in "
        "mysql-event-listener.db.password",
        fields=("url", "password"),
    )
    def is_password_specified_once(self) -> bool:
        if self.url is None or self.password is None:
            return True
        return "password" not in url_credentials(self.url)
