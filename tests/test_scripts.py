import json

import pytest

import create_token
import reset_password
from gyatt_api.app.core.config import Settings
from gyatt_api.app.core.security import decode_access_token, hash_password, verify_password

SECRET = "script-test-secret-key-long-enough-for-hs256"


@pytest.fixture
def data_dir(tmp_path):
    users = [{"id": 1, "email": "a@x.com", "password": hash_password("old", rounds=4), "isAdmin": True}]
    (tmp_path / "users.json").write_text(json.dumps(users), encoding="utf-8")
    return tmp_path


def _stored(data_dir):
    return json.loads((data_dir / "users.json").read_text(encoding="utf-8"))[0]


def test_reset_password_updates_digest(data_dir, capsys):
    code = reset_password.main(["--data-dir", str(data_dir), "--email", "a@x.com", "--password", "new", "--rounds", "4"])

    assert code == 0
    user = _stored(data_dir)
    assert verify_password("new", user["password"])
    assert not verify_password("old", user["password"])
    assert user["updatedAt"]
    assert "Password updated" in capsys.readouterr().out


def test_reset_password_unknown_email(data_dir):
    before = _stored(data_dir)

    code = reset_password.main(["--data-dir", str(data_dir), "--email", "nobody@x.com", "--password", "new", "--rounds", "4"])

    assert code == 2
    assert _stored(data_dir) == before


def test_reset_password_missing_store(tmp_path):
    code = reset_password.main(["--data-dir", str(tmp_path / "none"), "--email", "a@x.com", "--password", "x"])
    assert code == 1


def test_reset_password_rejects_empty_prompt(data_dir, monkeypatch):
    monkeypatch.setattr(reset_password.getpass, "getpass", lambda prompt: "")

    assert reset_password.main(["--data-dir", str(data_dir), "--email", "a@x.com"]) == 1


def test_create_token_for_existing_user(data_dir, monkeypatch, capsys):
    monkeypatch.setenv("DATA_DIR", str(data_dir))
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("JWT_SECRET", SECRET)

    assert create_token.main(["--email", "a@x.com", "--days", "30"]) == 0

    token = capsys.readouterr().out.strip()
    claims = decode_access_token(token, Settings(secret_key=SECRET))
    assert claims["id"] == 1
    assert claims["isAdmin"] is True
    assert claims["exp"] - claims["iat"] == 30 * 24 * 60 * 60


def test_create_token_unknown_user(data_dir, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(data_dir))
    monkeypatch.setenv("STORAGE_BACKEND", "file")

    assert create_token.main(["--email", "nobody@x.com"]) == 2


def test_create_token_reports_unreadable_store(tmp_path, monkeypatch, capsys):
    (tmp_path / "users.json").write_bytes(b"\xff\xfe[\x00")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STORAGE_BACKEND", "file")

    assert create_token.main(["--email", "a@x.com"]) == 1
    assert "[!] Cannot read user store" in capsys.readouterr().err


def test_create_token_reports_missing_data_dir(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "none"))
    monkeypatch.setenv("STORAGE_BACKEND", "file")

    assert create_token.main(["--email", "a@x.com"]) == 1
    assert "[!]" in capsys.readouterr().err


def test_reset_password_reports_corrupted_store(tmp_path, capsys):
    (tmp_path / "users.json").write_text("[{", encoding="utf-8")

    code = reset_password.main(["--data-dir", str(tmp_path), "--email", "a@x.com", "--password", "new", "--rounds", "4"])

    assert code == 1
    assert "[!] Cannot update user store" in capsys.readouterr().err
    assert (tmp_path / "users.json").read_text(encoding="utf-8") == "[{"


def test_reset_password_defaults_to_configured_data_dir(data_dir, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(data_dir))

    assert reset_password.main(["--email", "a@x.com", "--password", "new", "--rounds", "4"]) == 0
    assert verify_password("new", _stored(data_dir)["password"])
