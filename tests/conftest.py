"""Pytest fixtures for autoloader tests."""

import tempfile
from pathlib import Path

import pytest

from autoloader.loader import IncludeOnceLoader


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create files (POSIX relative paths -> content) under root."""
    for rel_path, content in files.items():
        path = root.joinpath(*rel_path.split("/"))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def source_tree(temp_dir):
    """Return a function that builds a source tree under temp_dir/src."""
    root = temp_dir / "src"
    root.mkdir()

    def _build(files: dict[str, str]) -> Path:
        return write_files(root, files)

    return _build


class RecordingLoader:
    """FileLoader that records paths instead of executing them."""

    def __init__(self):
        self.loaded: list[str] = []

    def load(self, path: str) -> None:
        if path not in self.loaded:
            self.loaded.append(path)


@pytest.fixture
def recording_loader():
    return RecordingLoader()


@pytest.fixture
def include_loader():
    return IncludeOnceLoader()
