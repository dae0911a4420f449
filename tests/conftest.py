import pytest

from pykvconf import SectionRegistry


@pytest.fixture
def registry():
    """A fresh registry per test, so cached sections never leak between tests."""
    return SectionRegistry()


@pytest.fixture
def sample_file(tmp_path):
    """The two-line file from the README."""
    path = tmp_path / "test.txt"
    path.write_text("age: 10\nname: Bob\n", encoding="utf-8")
    return path
