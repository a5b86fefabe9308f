"""
Reading the package list handed to the gate.
"""

import re
from pathlib import Path

# Version specifiers start at the first of these characters
SPECIFIER_PATTERN = re.compile(r"[=<>!]")


def parse_package_line(line: str) -> str:
    """
    Reduce a dependency declaration to a bare package name.

    Args:
        line: Raw line, e.g. ``requests>=2.31``.

    Returns:
        The package name, or an empty string if nothing is left.
    """
    return SPECIFIER_PATTERN.split(line.strip(), maxsplit=1)[0].strip()


def parse_package_list(content: str) -> list[str]:
    """
    Extract package names from newline-separated declarations.

    Whole-line comments and lines that reduce to nothing are dropped.
    Duplicates keep their first position.
    """
    seen = set()
    packages = []
    for line in content.splitlines():
        if line.strip().startswith("#"):
            continue
        name = parse_package_line(line)
        if name and name not in seen:
            seen.add(name)
            packages.append(name)
    return packages


def read_package_list(path: str | Path) -> list[str]:
    """
    Read package names from a requirements-style file.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
    """
    with open(path, "r", encoding="utf-8") as f:
        return parse_package_list(f.read())
