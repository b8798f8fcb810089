"""HTTP client creation using httpx directly (sync).

Every transfer call that is not handed a client builds one here from a
:class:`~pyhttpget.config.Config`, so proxy and connection limit changes
apply to all connections opened after :func:`pyhttpget.config.setup`.
"""

import logging

import httpx

from pyhttpget.config import Config
from pyhttpget.http.cookies import load_cookies_from_file
from pyhttpget.http.headers import load_headers_from_file

logger = logging.getLogger(__name__)


def create_client(config: Config) -> httpx.Client:
    """Create an httpx client from configuration.

    Args:
        config: Configuration object

    Returns:
        Configured httpx.Client instance; the caller is responsible for
        closing it

    Example:
        >>> with create_client(Config()) as client:
        ...     response = client.get(url)
    """
    headers = {'User-Agent': config.user_agent}

    if config.header_file:
        headers.update(load_headers_from_file(config.header_file))

    cookies = None
    if config.cookie_file:
        cookies = load_cookies_from_file(config.cookie_file)

    logger.debug(
        f"Creating client (limit={config.connection_limit}, proxy={config.proxy or 'none'})"
    )

    return httpx.Client(
        headers=headers,
        cookies=cookies,
        timeout=config.timeout,
        verify=config.verify_ssl,
        follow_redirects=config.follow_redirects,
        limits=httpx.Limits(max_connections=config.connection_limit),
        proxy=config.proxy,
    )
