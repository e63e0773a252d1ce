# usersvc

The groundwork of a user authentication service. It reads its settings
from a `.env` file, logs in colour to standard error, gives logged access
to an SQLite database and runs a gRPC server until it is stopped.

## Installation

```
pip install .
```

Add the `test` extra to install the test tools too:

```
pip install ".[test]"
```

## Configuration

Put a `.env` file in the directory you start the service from. Its
variables are added to the environment; a variable that is already set in
the environment keeps its value. If the file is missing or cannot be read,
the error is logged and the command exits with status 1.

| Variable       | Meaning                                                    |
|----------------|------------------------------------------------------------|
| `DB_PATH`      | Path of the SQLite database file                           |
| `GRPC_HOST`    | Host the gRPC server listens on                            |
| `GRPC_PORT`    | Port the gRPC server listens on                            |
| `GRPC_NETWORK` | Listener type: `tcp`, `tcp4`, `tcp6` or `unix`             |

Example:

```
DB_PATH=users.db
GRPC_HOST=localhost
GRPC_PORT=50051
GRPC_NETWORK=tcp
```

With `unix`, the listener address is `unix:<host>:<port>`. Any other
network type, or an address that cannot be bound, is logged as an error and
the command ends.

## Running

```
usersvc
```

The command takes no options. It starts the gRPC server and blocks. Ctrl+C
stops the server; when the server stops for any reason, everything that
was registered for closing is closed.

## Logging

`usersvc.logger.load(stream=None)` returns a `Logger` with `debug`, `info`,
`error`, `error_op(message, op)` (logged as `op: message`) and `fatal`
(logs an error, then raises `SystemExit(1)`). Every level from debug up is
written to the stream, standard error by default, one line per record: a
time stamp, the level in colour, the message in cyan, and the record's
`fields` mapping as indented JSON (`{}` when there is none). The handler is
`usersvc.logger.PrettyHandler`, a `logging.Handler` that can be attached to
any standard logger.

## Using it as a library

```python
from usersvc.config import load_config
from usersvc.logger import load
from usersvc.storage import Query, connect

log = load()
config = load_config(".env")

with connect(log, config.db) as db:
    db.execute(Query("create", "CREATE TABLE IF NOT EXISTS users (name TEXT)", []))
    db.execute(Query("add-user", "INSERT INTO users (name) VALUES ($1)", ["alice"]))
    (count,) = db.query_row(Query("count-users", "SELECT count(*) FROM users", []))
```

- `usersvc.config` holds `DBConfig`, `GRPCServerConfig`, `HttpConfig`,
  `FileSystemConfig` and `HandlersConfig`, each with `from_env()` where it
  reads the environment, plus `must_load(filename)` and
  `load_config(filename)`. Bad values raise `ConfigError`.
- `usersvc.storage.Query(name, sql, args)` is a named statement whose
  `$1`, `$2`, … placeholders are bound to `args`; `str(query)` shows the
  statement with the arguments filled in, which is what the database logs
  at debug level. `Database.execute` and `Database.query` return a cursor,
  `Database.query_row` returns the first row or raises `LookupError`.
  A database that cannot be opened makes the logger's `fatal` end the
  process.
- `usersvc.repository` has the `User` record and `AuthRepository`, which
  holds the logger and database.
- `usersvc.closer.Closer` closes registered resources in the order they
  were added; `watch_signals()` is a context manager that closes them on
  the first Ctrl+C.
- `usersvc.server.GRPCServer` has `start(cfg)` (returns the bound port),
  `serve(cfg)` (blocks) and `close()`.
- `usersvc.app.Provider` creates the logger, configuration, database and
  repository the first time each one is asked for and reuses it afterwards.
  `usersvc.app.App` runs the gRPC server with a provider's settings;
  `usersvc.app.main` is the `usersvc` command.

## What it does not do

- The gRPC server registers no services: there are no sign-up, sign-in or
  sign-out calls, and every request is answered as unimplemented.
- `AuthRepository` runs no queries; there is no user table and no
  password checking.
- The service does not open the database when it starts; only the
  library's `Provider.db()` or `connect()` does.
- `HttpConfig`, `HandlersConfig` and `FileSystemConfig` are settings only;
  there is no HTTP server or file storage.

## Tests

```
pytest
```