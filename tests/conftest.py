"""Pytest configuration and shared fixtures."""
import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_lines():
    """A small CC-CEDICT excerpt: header, blank line, entries, one bad line."""
    return [
        "# CC-CEDICT\n",
        "# Community maintained free Chinese-English dictionary.\n",
        "#! version=1\n",
        "#! subversion=0\n",
        "#! format=ts\n",
        "#! charset=UTF-8\n",
        "#! entries=4\n",
        "\n",
        "你好 你好 [ni3 hao3] /Hello!/Hi!/How are you?/\n",
        "愛 爱 [ai4] /to love/to be fond of/to like/\n",
        "這 这 zhe4 /this/\n",
        "中國 中国 [Zhong1 guo2] /China/\n",
        "籃 篮 [lan2] /basket (receptacle)/basket (in basketball)/\n",
    ]


@pytest.fixture
def sample_text(sample_lines):
    """The sample excerpt as one document."""
    return "".join(sample_lines)


@pytest.fixture
def sample_file(temp_dir, sample_text):
    """The sample excerpt written to a UTF-8 file."""
    path = temp_dir / "cedict_ts.u8"
    path.write_text(sample_text, encoding="utf-8")
    return path
