"""Response formatting bridge -- maps :class:`httpx.Response` to the output system.

After a registry call completes, :func:`format_api_response` writes the
status line to stderr and routes the body through
:meth:`~gemauth.output.OutputManager.format_response`.
"""

from __future__ import annotations

from typing import Any

import httpx

from gemauth.output import get_output


def format_api_response(response: httpx.Response) -> None:
    """Format and print a registry response using the global output system.

    Args:
        response: The :class:`httpx.Response` to format and display.
    """
    output = get_output()
    output.info(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())

    content_type = response.headers.get("content-type", "text/plain")
    data = extract_response_data(response)
    if data is not None:
        output.format_response(data, content_type)


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Registry endpoints answer with JSON or with plain text (the sign-in
    endpoint returns the bare key). JSON is tried first.

    Returns:
        A JSON-decoded object, a ``str`` of raw text, or ``None`` if the
        body is empty.
    """
    if not response.content:
        return None

    if "json" in response.headers.get("content-type", ""):
        try:
            return response.json()
        except ValueError:
            pass

    return response.text
