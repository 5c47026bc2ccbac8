from pathlib import Path

from apartment_manager.config import Settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    settings = Settings()

    assert settings.apartments_path == Path(".") / "apartments.dat"
    assert settings.accounts_path == Path(".") / "users.dat"
    assert settings.parking_path == Path(".") / "parking_lots.dat"
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APTMGR_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("APTMGR_ACCOUNTS_FILE", "accounts.csv")

    settings = Settings()

    assert settings.accounts_path == tmp_path / "data" / "accounts.csv"
    assert settings.apartments_path == tmp_path / "data" / "apartments.dat"


def test_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("APTMGR_LOG_LEVEL=DEBUG\n", encoding="utf-8")

    assert Settings().log_level == "DEBUG"
