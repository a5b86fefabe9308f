"""
One httpx client for every request a gate run makes.

PyPI, pypistats and the GitHub GraphQL API are all reached through it, so
connections are pooled across the whole package list.
"""

import httpx

from package_health_gate import __version__
from package_health_gate.config import get_verify_ssl

USER_AGENT = f"package-health-gate/{__version__}"
REQUEST_TIMEOUT = 10

_http_client: httpx.Client | None = None
_http_client_verify_ssl: bool | None = None


def _new_client(verify_ssl: bool) -> httpx.Client:
    # PyPI redirects non-normalized project names to the canonical URL
    return httpx.Client(
        verify=verify_ssl,
        timeout=REQUEST_TIMEOUT,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


def _get_http_client() -> httpx.Client:
    """Return the client for the current run, honouring ``--insecure``.

    A client built under a different SSL verification setting is closed
    and replaced.
    """
    global _http_client, _http_client_verify_ssl
    verify_ssl = get_verify_ssl()

    if _http_client is not None and not _http_client.is_closed:
        if _http_client_verify_ssl == verify_ssl:
            return _http_client
        _http_client.close()

    _http_client = _new_client(verify_ssl)
    _http_client_verify_ssl = verify_ssl
    return _http_client


def close_http_client():
    """Close the client at the end of a run; the next request opens a new one."""
    global _http_client, _http_client_verify_ssl
    if _http_client is not None and not _http_client.is_closed:
        _http_client.close()
    _http_client = None
    _http_client_verify_ssl = None
