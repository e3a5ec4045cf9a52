import pytest


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from the real environment and ~/.code-scorer."""
    monkeypatch.setenv("CODE_SCORER_DATA_DIR", str(tmp_path / "data"))
    for name in ("CODE_SCORER_API_KEY", "CODE_SCORER_MODEL", "CODE_SCORER_API_BASE",
                 "CODE_SCORER_POLL_INTERVAL", "CODE_SCORER_WATCH_PATHS"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "data"
