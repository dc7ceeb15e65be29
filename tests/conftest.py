# tests/conftest.py
import pytest

from tests.fakes import make_kits_root, write_manifest


@pytest.fixture
def app_dir(tmp_path):
    """Unpacked app directory named 'Notes' with a valid manifest."""
    directory = tmp_path / "Notes"
    write_manifest(directory)
    return directory


@pytest.fixture
def output_dir(tmp_path):
    directory = tmp_path / "out"
    directory.mkdir()
    return directory


@pytest.fixture
def kits_root(tmp_path):
    return make_kits_root(tmp_path / "Windows Kits" / "10" / "bin", ["10.0.19041.0", "10.0.22621.0"])
