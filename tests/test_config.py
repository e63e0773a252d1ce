import os

import pytest

from usersvc.config import (
    Config,
    ConfigError,
    DBConfig,
    FileSystemConfig,
    GRPCServerConfig,
    HandlersConfig,
    HttpConfig,
    load_config,
    must_load,
)

_KEYS = (
    "DB_PATH",
    "BOOKS_FILE_DIR",
    "GRPC_HOST",
    "GRPC_PORT",
    "GRPC_NETWORK",
    "HTTP_HOST",
    "HTTP_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
    for key in _KEYS:
        os.environ.pop(key, None)


def test_db_config_from_env(monkeypatch):
    monkeypatch.setenv("DB_PATH", "users.db")
    assert DBConfig.from_env().dsn() == "users.db"


def test_db_config_missing_is_empty():
    assert DBConfig.from_env().dsn() == ""


def test_file_system_config_from_env(monkeypatch):
    monkeypatch.setenv("BOOKS_FILE_DIR", "/srv/books")
    assert FileSystemConfig.from_env().storage_path == "/srv/books"


def test_grpc_config_from_env(monkeypatch):
    monkeypatch.setenv("GRPC_HOST", "localhost")
    monkeypatch.setenv("GRPC_PORT", "50051")
    monkeypatch.setenv("GRPC_NETWORK", "tcp")
    cfg = GRPCServerConfig.from_env()
    assert cfg.host == "localhost"
    assert cfg.port == "50051"
    assert cfg.network == "tcp"
    assert cfg.addr() == "localhost:50051"


def test_grpc_addr_with_empty_values():
    assert GRPCServerConfig().addr() == ":"


def test_http_config_from_env(monkeypatch):
    monkeypatch.setenv("HTTP_HOST", "0.0.0.0")
    monkeypatch.setenv("HTTP_PORT", "8080")
    assert HttpConfig.from_env().addr() == "0.0.0.0:8080"


@pytest.mark.parametrize("text, number", [("12", 12), ("-3", -3), ("+7", 7), ("0", 0)])
def test_handlers_config_parses_integers(text, number):
    cfg = HandlersConfig(raw_page_number=text, raw_books_limit=text, raw_http_body_size=text)
    assert cfg.default_books_page_number() == number
    assert cfg.default_books_limit() == number
    assert cfg.http_body_size() == number


@pytest.mark.parametrize("text", ["", "abc", " 12", "1_000", "1.5", "12 "])
def test_handlers_config_rejects_bad_integers(text):
    cfg = HandlersConfig(raw_page_number=text, raw_books_limit=text, raw_http_body_size=text)
    with pytest.raises(ConfigError):
        cfg.default_books_page_number()
    with pytest.raises(ConfigError):
        cfg.default_books_limit()
    with pytest.raises(ConfigError):
        cfg.http_body_size()


def test_handlers_config_rejects_out_of_range():
    cfg = HandlersConfig(raw_http_body_size=str(2**63))
    with pytest.raises(ConfigError, match="out of range"):
        cfg.http_body_size()


def test_handlers_config_defaults_are_empty_strings():
    cfg = HandlersConfig()
    assert (cfg.json, cfg.pdf, cfg.html) == ("", "", "")
    assert (cfg.books_url, cfg.not_found_url) == ("", "")


def test_must_load_missing_file(tmp_path):
    missing = tmp_path / "absent.env"
    with pytest.raises(ConfigError, match=f"file {missing} does not exist"):
        must_load(str(missing))


def test_must_load_directory_is_incorrect_data(tmp_path):
    with pytest.raises(ConfigError, match="Incorrect data in the configuration file"):
        must_load(str(tmp_path))


def test_must_load_sets_variables(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DB_PATH=data.sqlite\nGRPC_PORT=9000\n")
    must_load(str(env_file))
    assert DBConfig.from_env().dsn() == "data.sqlite"
    assert GRPCServerConfig.from_env().port == "9000"


def test_must_load_keeps_existing_values(tmp_path, monkeypatch):
    monkeypatch.setenv("DB_PATH", "kept.sqlite")
    env_file = tmp_path / ".env"
    env_file.write_text("DB_PATH=other.sqlite\n")
    must_load(str(env_file))
    assert DBConfig.from_env().dsn() == "kept.sqlite"


def test_load_config_builds_config(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "DB_PATH=users.sqlite\nGRPC_HOST=127.0.0.1\nGRPC_PORT=7000\nGRPC_NETWORK=tcp\n"
    )
    cfg = load_config(str(env_file))
    assert cfg == Config(
        db=DBConfig(path="users.sqlite"),
        grpc_server=GRPCServerConfig(host="127.0.0.1", port="7000", network="tcp"),
    )
    assert cfg.grpc_server.addr() == "127.0.0.1:7000"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "nothing.env"))