"""User authentication service groundwork: configuration, logging, SQLite storage and a gRPC server."""

__version__ = "0.1.0"