"""
Tests for package list parsing.
"""

import pytest

from package_health_gate.requirements import (
    parse_package_line,
    parse_package_list,
    read_package_list,
)


@pytest.mark.parametrize(
    "line, expected",
    [
        ("requests", "requests"),
        ("  requests  ", "requests"),
        ("requests==2.31.0", "requests"),
        ("django>=4.2", "django"),
        ("numpy<2", "numpy"),
        ("flask!=2.0.0", "flask"),
        ("httpx >= 0.27", "httpx"),
        ("==1.0", ""),
        ("", ""),
    ],
)
def test_parse_package_line(line, expected):
    """Version specifiers are cut off at the first of = < > !."""
    assert parse_package_line(line) == expected


def test_parse_package_list_drops_empty_lines_and_comments():
    content = "requests==2.31.0\n\n# tooling\nrich>=13\n   \n>=1.0\n"
    assert parse_package_list(content) == ["requests", "rich"]


def test_parse_package_list_removes_duplicates_preserving_order():
    content = "rich\nrequests==2.0\nrich>=13\n"
    assert parse_package_list(content) == ["rich", "requests"]


def test_read_package_list(tmp_path):
    path = tmp_path / "requirements.txt"
    path.write_text("typer>=0.12\nhttpx\n", encoding="utf-8")
    assert read_package_list(path) == ["typer", "httpx"]


def test_read_package_list_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_package_list(tmp_path / "missing.txt")
