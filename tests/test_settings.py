from pathlib import Path

from quickpost.settings import (
    DEFAULT_PORT,
    FileConfig,
    Settings,
    choose_env_file,
    load_file_config,
)


def test_defaults(monkeypatch):
    for name in ("PORT", "AUTO_OPEN", "POSTS_DIR", "STATIC_DIR"):
        monkeypatch.delenv(name, raising=False)

    s = Settings()
    assert s.PORT == DEFAULT_PORT
    assert s.AUTO_OPEN is True
    assert s.posts_path == Path("posts").resolve()
    assert (s.static_path / "index.html").is_file()


def test_values_come_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("AUTO_OPEN", "false")
    monkeypatch.setenv("POSTS_DIR", "/tmp/blog")

    s = Settings()

    assert s.PORT == 9000
    assert s.AUTO_OPEN is False
    assert s.posts_path == Path("/tmp/blog").resolve()


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"


def test_load_file_config_reads_known_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"port": 8080, "autoOpen": false, "theme": "dark"}')

    assert load_file_config(path) == FileConfig(port=8080, autoOpen=False)


def test_load_file_config_missing_file(tmp_path):
    assert load_file_config(tmp_path / "absent.json") == FileConfig()


def test_load_file_config_invalid_file_degrades(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{broken")

    with caplog.at_level("WARNING"):
        assert load_file_config(path) == FileConfig()

    assert any("Ignoring config file" in rec.message for rec in caplog.records)
