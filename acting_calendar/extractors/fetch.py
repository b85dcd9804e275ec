"""HTTP fetcher for provider pages.

One shared httpx client per run with a fixed browser-like User-Agent.
Failures never propagate: a page that cannot be fetched yields ``None``
and contributes zero events.
"""

from typing import Optional

import httpx
from rich.console import Console

console = Console()

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14.7; rv:134.0) "
    "Gecko/20100101 Firefox/134.0"
)

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-GB,en;q=0.9",
}

REQUEST_TIMEOUT = 30.0


def create_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Create the shared client used for every provider in a run."""
    return httpx.AsyncClient(
        timeout=REQUEST_TIMEOUT,
        follow_redirects=True,
        headers=DEFAULT_HEADERS,
        transport=transport,
    )


def describe_error(error: Exception) -> str:
    """Short reason for a failed fetch ("404", "timeout", "connection", ...)."""
    if isinstance(error, httpx.HTTPStatusError):
        return str(error.response.status_code)
    if isinstance(error, httpx.TimeoutException):
        return "timeout"
    if isinstance(error, httpx.ConnectError):
        return "connection"
    return type(error).__name__.lower()


async def fetch_page(client: httpx.AsyncClient, url: str) -> Optional[str]:
    """GET a page and return its text, or None on any HTTP failure."""
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        console.print(f"[yellow]Fetch failed ({describe_error(e)}): {url}[/yellow]")
        return None

    console.print(f"[dim]Fetched {url} ({len(response.text)} chars)[/dim]")
    return response.text
