"""User records and the authentication repository."""

from __future__ import annotations

from dataclasses import dataclass, field

from usersvc.logger import Logger
from usersvc.storage import Database


@dataclass
class User:
    """A registered user; the password hash is kept out of the repr."""

    id: int = 0
    name: str = ""
    email: str = ""
    hash_password: str = field(default="", repr=False)


class AuthRepository:
    """Data access for authentication, backed by the service database."""

    def __init__(self, log: Logger, db: Database) -> None:
        self.log = log
        self.db = db


def new_repository(log: Logger, db: Database) -> AuthRepository:
    """Build the repository the service uses."""
    return AuthRepository(log, db)