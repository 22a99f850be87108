from pathlib import Path

import pytest

INPUTS = Path(__file__).parent / "inputs"


@pytest.fixture
def inputs_dir() -> Path:
    """Directory holding the `jokes` (6 records) and `quotes` (5 records) files."""
    return INPUTS


@pytest.fixture
def write_file(tmp_path):
    """Create a file under tmp_path, making parent directories as needed."""

    def _write(relative: str, content="") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write
