"""Construction of outbound GET and POST requests.

Requests are built through the client so that its default headers and
cookies are merged in, then handed to an optional customization hook
before the body is attached.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Union

import httpx

from pyhttpget.exceptions import InvalidRequest
from pyhttpget.http.params import RequestParams, encode_params

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class RequestMutator(ABC):
    """Base class for objects that customize a request before it is sent.

    Subclasses may add headers, cookies or a timeout, e.g.::

        class BearerAuth(RequestMutator):
            def mutate(self, request):
                request.headers["Authorization"] = f"Bearer {self.token}"

    A plain ``callable(request)`` is accepted wherever a mutator is.
    """

    @abstractmethod
    def mutate(self, request: httpx.Request) -> None:
        """Modify ``request`` in place."""


RequestCustomizer = Union[RequestMutator, Callable[[httpx.Request], None]]


def apply_hook(request: httpx.Request, hook: Optional[RequestCustomizer]) -> None:
    """Run the customization hook on ``request``, if one was given."""
    if hook is None:
        return
    if isinstance(hook, RequestMutator):
        hook.mutate(request)
    else:
        hook(request)


def validate_url(url: str) -> httpx.URL:
    """Parse ``url`` and make sure it is an absolute http(s) URL.

    Raises:
        InvalidRequest: If the URL cannot be used for a request
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidRequest(f"Malformed URL {url!r}: {e}", url=url) from e

    if parsed.scheme not in ("http", "https"):
        raise InvalidRequest(f"Unsupported URL scheme in {url!r}", url=url)
    if not parsed.host:
        raise InvalidRequest(f"URL has no host: {url!r}", url=url)

    return parsed


def append_query(url: str, query: str) -> str:
    """Append an encoded query to ``url``.

    Uses ``?`` when the URL has no query yet and ``&`` when it already has
    one, unless the URL already ends with a separator. Any fragment stays
    at the end.

    Example:
        >>> append_query("http://h/p?a=1#top", "b=2")
        'http://h/p?a=1&b=2#top'
    """
    if not query:
        return url

    base, hash_mark, fragment = url.partition("#")
    if "?" not in base:
        separator = "?"
    elif base.endswith(("?", "&")):
        separator = ""
    else:
        separator = "&"

    return f"{base}{separator}{query}{hash_mark}{fragment}"


def build_get_request(
    client: httpx.Client,
    url: str,
    params: Optional[RequestParams] = None,
    hook: Optional[RequestCustomizer] = None,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Request:
    """Build a GET request with ``params`` appended to the query string.

    Args:
        client: Client whose defaults (headers, cookies, timeout) apply
        url: Target URL
        params: Optional ordered parameters
        hook: Optional request customizer
        headers: Extra headers, set before the hook runs

    Returns:
        The request, ready to be sent

    Raises:
        InvalidRequest: If the URL or parameters are malformed
    """
    validate_url(url)
    full_url = append_query(url, encode_params(params))

    try:
        request = client.build_request("GET", full_url, headers=headers)
    except httpx.InvalidURL as e:
        raise InvalidRequest(f"Malformed URL {full_url!r}: {e}", url=full_url) from e

    apply_hook(request, hook)
    return request


def build_post_request(
    client: httpx.Client,
    url: str,
    params: Optional[RequestParams] = None,
    hook: Optional[RequestCustomizer] = None,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Request:
    """Build a form-encoded POST request.

    The hook runs before the body is attached, so header changes it makes
    (including ``Content-Type``) are kept. When ``params`` is empty no body
    is sent.

    Raises:
        InvalidRequest: If the URL or parameters are malformed
    """
    validate_url(url)

    try:
        request = client.build_request(
            "POST", url, headers={**(headers or {}), "Content-Type": FORM_CONTENT_TYPE}
        )
    except httpx.InvalidURL as e:
        raise InvalidRequest(f"Malformed URL {url!r}: {e}", url=url) from e

    apply_hook(request, hook)

    body = encode_params(params)
    if not body:
        return request

    # Content-Length was computed for the empty request
    body_headers = httpx.Headers(request.headers)
    body_headers.pop("Content-Length", None)

    return httpx.Request(
        request.method,
        request.url,
        headers=body_headers,
        content=body.encode("ascii"),
        extensions=request.extensions,
    )
