import os
import sys
from pathlib import Path
from typing import Callable, Dict, Mapping

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'fml' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from fml.core.composition import PromptResolver
from fml.core.config import clear_config_cache
from fml.data import clear_caches
from helpers.fml_files import write_tree

SAMPLES_DIR = TESTS_ROOT / "context" / "fml_samples"


@pytest.fixture(autouse=True)
def _isolate_fml_config(monkeypatch: pytest.MonkeyPatch):
    """Drop FML_* overrides leaking from the host env and reset config caches."""
    for key in list(os.environ):
        if key.startswith("FML_"):
            monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    clear_caches()
    yield
    clear_config_cache()


@pytest.fixture
def samples_dir() -> Path:
    return SAMPLES_DIR


@pytest.fixture
def fml_tree(tmp_path: Path) -> Callable[[Mapping[str, str]], Dict[str, Path]]:
    """Write a tree of documents under tmp_path; returns name -> absolute path."""

    def _write(files: Mapping[str, str]) -> Dict[str, Path]:
        return write_tree(tmp_path, files)

    return _write


@pytest.fixture
def resolver(tmp_path: Path) -> PromptResolver:
    """Resolver using bundled defaults only (tmp_path has no fml.yaml)."""
    return PromptResolver(project_root=tmp_path)
