from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from vite_bridge.application.mode import PRODUCTION_ENV_VARS
from vite_bridge.infrastructure.config import reset_settings

FIXTURES = Path(__file__).resolve().parent / "fixtures"
TEST_MANIFEST = FIXTURES / "test-manifest.json"


@pytest.fixture
def manifest_path() -> Path:
    return TEST_MANIFEST


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    def write(data: dict[str, Any], name: str = "manifest.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return write


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    for name in (*PRODUCTION_ENV_VARS, "APP_URL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
