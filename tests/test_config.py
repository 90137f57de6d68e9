import logging

from gyatt_api.app.core.config import PROJECT_ROOT, Settings, resolve_path
from gyatt_api.app.core.logging_config import setup_logging


def test_relative_paths_resolve_against_project_root(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert resolve_path("database") == (PROJECT_ROOT / "database").resolve()
    assert resolve_path(tmp_path / "elsewhere") == (tmp_path / "elsewhere").resolve()


def test_settings_read_environment_per_instance(monkeypatch):
    monkeypatch.setenv("DATA_DIR", "/srv/gyatt")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = Settings()

    assert settings.data_dir == "/srv/gyatt"
    assert settings.port == 8080
    assert settings.cors_origin_list() == ["https://a.example", "https://b.example"]
    assert Settings(port=1).port == 1


def test_setup_logging_creates_log_directory(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    log_file = tmp_path / "logs" / "api.log"

    try:
        setup_logging("debug", str(log_file))
        assert root.level == logging.DEBUG
        assert [type(h) for h in root.handlers] == [logging.StreamHandler, logging.FileHandler]
        logging.getLogger("gyatt_api.test").warning("hello")
        for handler in root.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")

        setup_logging("info", str(tmp_path / "other.log"))
        assert len(root.handlers) == 2
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
