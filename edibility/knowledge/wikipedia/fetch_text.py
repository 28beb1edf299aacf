"""Fetch the paragraph text of a Wikipedia article."""

__all__ = ["fetch_text", "paragraph_text"]

import http.client
import sys
import urllib.error
import urllib.request

import lxml.etree
import lxml.html

from edibility.core.errors import ExternalFetchError

# Patch urllib for Pyodide/WASM (browser) compatibility
if "pyodide" in sys.modules:
    import pyodide_http

    pyodide_http.patch_all()


def paragraph_text(html: bytes | str) -> str:
    """Join the text of every <p> element, lower-cased."""
    try:
        document = lxml.html.fromstring(html)
    except (lxml.etree.ParserError, ValueError) as e:
        raise ExternalFetchError(f"Unparseable page: {e}") from e
    return " ".join(p.text_content() for p in document.iter("p")).lower()


def fetch_text(
    url: str,
    timeout: int = 30,
    user_agent: str = "edibility/0.1",
) -> str:
    """
    Download an article and return its lower-cased paragraph text.

    Raises:
        ExternalFetchError: On network, HTTP, malformed URL or parse errors
    """
    headers = {
        "Accept": "text/html",
        "User-Agent": user_agent,
    }
    try:
        req = urllib.request.Request(url, headers=headers, method="GET")
        with urllib.request.urlopen(req, timeout=timeout) as response:
            body = response.read()
    except urllib.error.HTTPError as e:
        raise ExternalFetchError(f"HTTP {e.code} for {url}") from e
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        raise ExternalFetchError(f"Cannot reach {url}: {e}") from e
    except http.client.HTTPException as e:
        raise ExternalFetchError(f"Bad response from {url}: {e!r}") from e
    except ValueError as e:
        raise ExternalFetchError(f"Invalid URL {url!r}: {e}") from e

    return paragraph_text(body)
