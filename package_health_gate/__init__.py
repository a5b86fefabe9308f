"""
Package Health Gate: block unhealthy PyPI dependencies in CI.
"""

__version__ = "0.3.0"
