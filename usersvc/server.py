"""The gRPC server of the service."""

from __future__ import annotations

from concurrent import futures

import grpc

from usersvc.config import GRPCServerConfig
from usersvc.logger import Logger

_TCP_NETWORKS = frozenset({"tcp", "tcp4", "tcp6"})


def _target(cfg: GRPCServerConfig) -> str:
    if cfg.network in _TCP_NETWORKS:
        return cfg.addr()
    if cfg.network == "unix":
        return f"unix:{cfg.addr()}"
    raise ValueError(f"listen {cfg.network}: unknown network {cfg.network}")


class GRPCServer:
    """Listens on the configured address and serves gRPC requests."""

    def __init__(self, log: Logger) -> None:
        self._log = log
        self._server: grpc.Server | None = None
        self.port: int | None = None

    def start(self, cfg: GRPCServerConfig) -> int:
        """Bind and start serving in the background; return the bound port."""
        if self._server is not None:
            raise RuntimeError("grpc server is already running")
        target = _target(cfg)
        server = grpc.server(futures.ThreadPoolExecutor(max_workers=10))
        try:
            port = server.add_insecure_port(target)
        except RuntimeError as err:
            raise OSError(f"listen {cfg.network} {cfg.addr()}: {err}") from err
        if port == 0:
            raise OSError(f"listen {cfg.network} {cfg.addr()}: cannot bind")
        server.start()
        self._server = server
        self.port = port
        return port

    def serve(self, cfg: GRPCServerConfig) -> None:
        """Start and block until the server is stopped."""
        self.start(cfg)
        server = self._server
        if server is not None:
            server.wait_for_termination()

    def close(self) -> None:
        """Stop the server and release its listener; does nothing if not running."""
        server = self._server
        if server is None:
            return
        self._server = None
        self._log.info("stopping grpc server")
        server.stop(None).wait()
        self._log.info("close net listener")