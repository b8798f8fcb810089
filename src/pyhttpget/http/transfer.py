"""Request execution, response validation, decoding and streaming.

Every operation sends one request, checks that the status is 2xx and then
either decodes the whole body to text or copies it to a binary sink.

A non-2xx response is *not* an error: text operations return ``""`` and
stream operations write nothing. Use a request hook or your own client if
you need to inspect failures.

Nothing is retried. Network failures surface as
:class:`~pyhttpget.exceptions.TransportError` after the response and any
call-owned client have been closed.
"""

import codecs
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Optional, Union

import httpx

from pyhttpget.config import Config, get_config
from pyhttpget.exceptions import EncodingError, TransportError
from pyhttpget.http.client import create_client
from pyhttpget.http.params import RequestParams
from pyhttpget.http.request import RequestCustomizer, build_get_request, build_post_request

logger = logging.getLogger(__name__)

UNKNOWN_LENGTH = -1
DEFAULT_ENCODING = "utf-8"

# Streams copy the body as sent, so the sink receives Content-Length bytes
STREAM_HEADERS = {"Accept-Encoding": "identity"}

ProgressCallback = Callable[[int, int], None]


def is_success(status_code: int) -> bool:
    """Return True for status codes in the 200-299 range."""
    return 200 <= status_code <= 299


def content_length(response: httpx.Response) -> int:
    """Return the declared Content-Length, or ``UNKNOWN_LENGTH``."""
    value = response.headers.get("Content-Length")
    if value is None:
        return UNKNOWN_LENGTH
    try:
        return int(value)
    except ValueError:
        return UNKNOWN_LENGTH


def resolve_encoding(response: httpx.Response, config: Config) -> str:
    """Pick the codec used to decode ``response``.

    Priority: ``config.default_encoding``, then the charset declared by the
    response, then UTF-8. The override wins even when the server declares
    an explicit, different charset.

    Raises:
        EncodingError: If the chosen name is not a known text codec
    """
    encoding = config.default_encoding or response.charset_encoding or DEFAULT_ENCODING
    url = str(response.request.url)
    try:
        codec = codecs.lookup(encoding)
    except LookupError as e:
        raise EncodingError(f"Unknown text encoding {encoding!r}", url=url, encoding=encoding) from e

    # base64, hex, rot13, zip... are bytes-to-bytes or str-to-str codecs
    if not getattr(codec, "_is_text_encoding", True):
        raise EncodingError(f"{encoding!r} is not a text encoding", url=url, encoding=encoding)
    return encoding


@contextmanager
def _client_scope(client: Optional[httpx.Client], config: Config) -> Iterator[httpx.Client]:
    """Yield the caller's client, or a new one that is closed afterwards."""
    if client is not None:
        yield client
    else:
        with create_client(config) as own_client:
            yield own_client


@contextmanager
def _open_response(
    client: httpx.Client, request: httpx.Request, config: Config
) -> Iterator[httpx.Response]:
    """Send ``request`` and yield the unread response, closing it on exit.

    A slot of ``config.connection_slots`` is held from send until close, so
    at most ``config.connection_limit`` responses are open at once.
    """
    url = str(request.url)

    with config.connection_slots:
        logger.debug(f"{request.method} {url}")
        try:
            response = client.send(request, stream=True)
        except httpx.RequestError as e:
            raise TransportError(f"{request.method} {url} failed: {e}", url=url) from e

        try:
            yield response
        except httpx.RequestError as e:
            raise TransportError(f"Reading response from {url} failed: {e}", url=url) from e
        finally:
            response.close()


def _read_text(client: httpx.Client, request: httpx.Request, config: Config) -> str:
    with _open_response(client, request, config) as response:
        if not is_success(response.status_code):
            logger.warning(f"Skipping body of {request.url}: HTTP {response.status_code}")
            return ""

        encoding = resolve_encoding(response, config)
        content = response.read()
        logger.debug(f"Read {len(content)} bytes from {request.url}, decoding as {encoding}")
        return content.decode(encoding, errors="replace")


def _write_stream(
    client: httpx.Client,
    request: httpx.Request,
    sink: BinaryIO,
    config: Config,
    progress: Optional[ProgressCallback],
) -> bool:
    """Copy the response body to ``sink``.

    ``progress(transferred, total)`` is called after each chunk and once
    more when the body is exhausted, so an empty body still reports once.
    ``transferred`` is the number of bytes received on the wire, the same
    unit as the declared Content-Length ``total``, even if the server
    compressed the body.

    Returns:
        True if the body was copied, False if the status was not 2xx
    """
    with _open_response(client, request, config) as response:
        if not is_success(response.status_code):
            logger.warning(f"Skipping body of {request.url}: HTTP {response.status_code}")
            return False

        total = content_length(response)
        written = 0

        for chunk in response.iter_bytes(chunk_size=config.chunk_size):
            sink.write(chunk)
            written += len(chunk)
            if progress:
                progress(response.num_bytes_downloaded, total)

        if progress:
            progress(response.num_bytes_downloaded, total)

        logger.debug(
            f"Copied {written} bytes ({response.num_bytes_downloaded} on the wire) from {request.url}"
        )
        return True


def get_text(
    url: str,
    params: Optional[RequestParams] = None,
    hook: Optional[RequestCustomizer] = None,
    *,
    config: Optional[Config] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """HTTP GET, returning the decoded body.

    Args:
        url: Target URL
        params: Optional ordered query parameters
        hook: Optional request customizer
        config: Configuration (defaults to the process-wide one)
        client: Existing client to send through (not closed by this call)

    Returns:
        The body as text, or ``""`` if the status was not 2xx

    Raises:
        InvalidRequest: If the URL or parameters are malformed
        TransportError: If the request failed at the network level
        EncodingError: If the charset is not a known codec
    """
    config = config or get_config()
    with _client_scope(client, config) as http:
        request = build_get_request(http, url, params, hook)
        return _read_text(http, request, config)


def get_stream(
    url: str,
    sink: BinaryIO,
    params: Optional[RequestParams] = None,
    hook: Optional[RequestCustomizer] = None,
    progress: Optional[ProgressCallback] = None,
    *,
    config: Optional[Config] = None,
    client: Optional[httpx.Client] = None,
) -> None:
    """HTTP GET, copying the body to ``sink``.

    ``sink`` only needs a ``write(bytes)`` method and is not closed.
    ``progress`` receives ``(bytes_transferred, total)`` where ``total`` is
    ``UNKNOWN_LENGTH`` if the server sent no Content-Length. Nothing is
    written (and ``progress`` is not called) if the status is not 2xx.
    """
    config = config or get_config()
    with _client_scope(client, config) as http:
        request = build_get_request(http, url, params, hook, STREAM_HEADERS)
        _write_stream(http, request, sink, config, progress)


def post_text(
    url: str,
    params: Optional[RequestParams] = None,
    hook: Optional[RequestCustomizer] = None,
    *,
    config: Optional[Config] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """HTTP POST (x-www-form-urlencoded), returning the decoded body.

    Behaves like :func:`get_text` except that ``params`` form the body.
    """
    config = config or get_config()
    with _client_scope(client, config) as http:
        request = build_post_request(http, url, params, hook)
        return _read_text(http, request, config)


def post_stream(
    url: str,
    sink: BinaryIO,
    params: Optional[RequestParams] = None,
    hook: Optional[RequestCustomizer] = None,
    progress: Optional[ProgressCallback] = None,
    *,
    config: Optional[Config] = None,
    client: Optional[httpx.Client] = None,
) -> None:
    """HTTP POST (x-www-form-urlencoded), copying the body to ``sink``."""
    config = config or get_config()
    with _client_scope(client, config) as http:
        request = build_post_request(http, url, params, hook, STREAM_HEADERS)
        _write_stream(http, request, sink, config, progress)


def download_file(
    url: str,
    dest_path: Union[str, Path],
    params: Optional[RequestParams] = None,
    hook: Optional[RequestCustomizer] = None,
    progress: Optional[ProgressCallback] = None,
    *,
    overwrite: bool = False,
    config: Optional[Config] = None,
    client: Optional[httpx.Client] = None,
) -> Optional[Path]:
    """Download ``url`` to ``dest_path`` with a GET request.

    The body is streamed into ``<dest_path>.part`` which is renamed into
    place only after a complete 2xx transfer, so ``dest_path`` never holds a
    partial file. An existing file is kept unless ``overwrite`` is set.

    Returns:
        ``dest_path``, or None if the status was not 2xx

    Raises:
        InvalidRequest, TransportError: As for :func:`get_stream`
    """
    dest_path = Path(dest_path)

    # Skip if file already exists (file-level resumability)
    if dest_path.exists() and not overwrite:
        logger.debug(f"Already downloaded: {dest_path}")
        return dest_path

    dest_path.parent.mkdir(parents=True, exist_ok=True)
    part_path = dest_path.with_name(dest_path.name + ".part")

    config = config or get_config()
    try:
        with _client_scope(client, config) as http:
            request = build_get_request(http, url, params, hook, STREAM_HEADERS)
            with open(part_path, "wb") as f:
                copied = _write_stream(http, request, f, config, progress)
    except Exception:
        part_path.unlink(missing_ok=True)
        raise

    if not copied:
        part_path.unlink(missing_ok=True)
        return None

    part_path.replace(dest_path)
    logger.debug(f"Downloaded: {url} -> {dest_path}")
    return dest_path
