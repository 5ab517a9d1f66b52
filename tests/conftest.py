"""
Base fixtures for all tests
"""
import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, Optional
from unittest.mock import MagicMock

import pytest
import yaml

from langbook.config import DEBUG_ENV, LEGACY_DEBUG_ENV

# Do not create __pycache__ files for tests
os.environ['PYTHONDONTWRITEBYTECODE'] = '1'


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Creates a temporary directory for tests"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def translation_dir(temp_dir: Path) -> Path:
    """Creates an empty translation root"""
    root = temp_dir / "resources" / "translation"
    root.mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def mock_logger():
    """Logger mock, lets tests assert on warnings"""
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    return logger


@pytest.fixture
def clean_debug_env(monkeypatch):
    """Removes both debug variables so the environment cannot leak into a test"""
    monkeypatch.delenv(DEBUG_ENV, raising=False)
    monkeypatch.delenv(LEGACY_DEBUG_ENV, raising=False)
    return monkeypatch


@pytest.fixture
def debug_env(monkeypatch):
    """Enables debug mode through the primary variable"""
    monkeypatch.setenv(DEBUG_ENV, "TRUE")
    monkeypatch.delenv(LEGACY_DEBUG_ENV, raising=False)
    return monkeypatch


@pytest.fixture
def write_lang_yaml() -> Callable[..., Path]:
    """Writes <root>/<file_name or lang>.yaml with the language file layout"""

    def _write(
        root: Path,
        lang: str,
        entries: Dict[str, str],
        name: str = "",
        version: str = "1",
        file_name: Optional[str] = None,
    ) -> Path:
        document = {
            "version": version,
            "lang": lang,
            "name": name or lang,
            "dict": entries,
        }
        path = root / f"{file_name or lang}.yaml"
        path.write_text(yaml.safe_dump(document, allow_unicode=True), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def zh_en_dir(translation_dir: Path, write_lang_yaml) -> Path:
    """zh-tw (default language) and en documents"""
    write_lang_yaml(translation_dir, "zh-tw", {"hello": "HELLO_ZH", "missing": "DEFAULT_ZH"}, name="Traditional Chinese")
    write_lang_yaml(translation_dir, "en", {"hello": "Hello"}, name="English")
    return translation_dir
