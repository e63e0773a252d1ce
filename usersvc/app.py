"""Wiring of the service and its entry point."""

from __future__ import annotations

import threading
from contextlib import nullcontext
from typing import Sequence, TextIO

from usersvc.closer import Closer
from usersvc.config import Config, ConfigError, load_config
from usersvc.logger import Logger, load
from usersvc.repository import AuthRepository, new_repository
from usersvc.server import GRPCServer
from usersvc.storage import Database, connect


class Provider:
    """Builds each service dependency on first use and reuses it afterwards."""

    def __init__(self, env_file: str = ".env", log_stream: TextIO | None = None) -> None:
        self.env_file = env_file
        self._log_stream = log_stream
        self._logger: Logger | None = None
        self._config: Config | None = None
        self._db: Database | None = None
        self._repository: AuthRepository | None = None

    def logger(self) -> Logger:
        if self._logger is None:
            self._logger = load(self._log_stream)
        return self._logger

    def config(self) -> Config:
        if self._config is None:
            self._config = load_config(self.env_file)
        return self._config

    def db(self) -> Database:
        if self._db is None:
            self._db = connect(self.logger(), self.config().db)
        return self._db

    def repository(self) -> AuthRepository:
        if self._repository is None:
            self._repository = new_repository(self.logger(), self.db())
        return self._repository


class App:
    """Runs the gRPC server until it stops, then closes what was opened."""

    def __init__(self, provider: Provider | None = None) -> None:
        self.provider = provider if provider is not None else Provider()
        self.closer = Closer()
        self.server = GRPCServer(self.provider.logger())
        self.closer.add(self.server)

    def run(self) -> None:
        """Serve until stopped; an interrupt stops the server when run from the main thread."""
        log = self.provider.logger()
        in_main = threading.current_thread() is threading.main_thread()
        with self.closer.watch_signals() if in_main else nullcontext():
            try:
                cfg = self.provider.config()
                self.server.serve(cfg.grpc_server)
            except (OSError, ValueError, RuntimeError) as err:
                log.error(str(err))
            finally:
                self.closer.close_all()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the service from the .env file in the working directory; arguments are ignored."""
    provider = Provider()
    try:
        App(provider).run()
    except ConfigError as err:
        provider.logger().error(str(err))
        return 1
    return 0