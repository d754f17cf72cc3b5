import os

import pytest


@pytest.fixture
def folder(tmp_path):
    return str(tmp_path)


@pytest.fixture
def write_file(folder):
    """Write bytes (or text) to `name` inside the test folder and return its path."""
    def _write(name, content):
        path = os.path.join(folder, name)
        data = content.encode("utf-8") if isinstance(content, str) else content
        with open(path, "wb") as f:
            f.write(data)
        return path
    return _write


@pytest.fixture
def read_bytes():
    def _read(path):
        with open(path, "rb") as f:
            return f.read()
    return _read
