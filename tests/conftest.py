from typing import Generator

import pytest

from config import config


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None, None, None]:
    config.cache_clear()
    yield
    config.cache_clear()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    # Keep a developer's .env and TAXMAT_* variables out of the tests.
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    for name in ("COIN", "INPUT_FORMAT", "OUTPUT_FORMAT", "QUARTER", "CURRENCY"):
        monkeypatch.delenv(f"TAXMAT_DEFAULT_{name}", raising=False)
    monkeypatch.delenv("TAXMAT_LOG_LEVEL", raising=False)
