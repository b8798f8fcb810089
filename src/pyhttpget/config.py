"""Configuration management for pyhttpget.

A single :class:`Config` is shared by every transfer call that is not given
one explicitly. It is replaced through :func:`setup` and
:func:`set_default_encoding`. There is no locking: configure the process
during startup, before requests are issued from several threads.
"""

import dataclasses
import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Optional

from pyhttpget.exceptions import InvalidConfig

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Configuration for HTTP transfers.

    ``default_encoding`` is applied to every text decode when set, even if
    the server declares a different charset. This is surprising but
    intentional: it lets callers override servers that lie about their
    encoding.
    """

    # Connection settings
    connection_limit: int = 10  # Max concurrent outbound connections
    proxy: Optional[str] = None

    # Text decoding
    default_encoding: Optional[str] = None  # Overrides the server charset

    # HTTP settings
    timeout: float = 100.0  # seconds
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    verify_ssl: bool = True
    follow_redirects: bool = True

    # Streaming
    chunk_size: int = 4096  # bytes per read when streaming

    # Extra request state loaded from disk
    cookie_file: Optional[str] = None
    header_file: Optional[str] = None

    # Shared by every request sent with this configuration
    connection_slots: threading.BoundedSemaphore = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        """Validate configuration."""
        if not isinstance(self.connection_limit, int) or self.connection_limit <= 0:
            raise InvalidConfig(
                f"Connection limit must be a positive integer, got {self.connection_limit!r}",
                connection_limit=self.connection_limit,
            )

        if self.chunk_size <= 0:
            raise InvalidConfig(
                f"Chunk size must be positive, got {self.chunk_size!r}",
                chunk_size=self.chunk_size,
            )

        # Setup proxy from environment if not specified
        if not self.proxy:
            self.proxy = os.environ.get('HTTPS_PROXY') or os.environ.get('HTTP_PROXY')

        self.connection_slots = threading.BoundedSemaphore(self.connection_limit)


_config = Config()


def get_config() -> Config:
    """Return the process-wide default configuration."""
    return _config


def setup(connection_limit: int, proxy: Optional[str] = None) -> Config:
    """Set the connection limit and proxy used by subsequent requests.

    At most ``connection_limit`` requests sent with the process-wide
    configuration are open at once; further callers block until a response
    is closed. Requests already in flight keep their connections and their
    slot in the previous limit.

    Args:
        connection_limit: Maximum concurrent outbound connections (> 0)
        proxy: Proxy URL, e.g. ``http://proxy.local:3128``

    Returns:
        The new process-wide configuration

    Raises:
        InvalidConfig: If ``connection_limit`` is not positive
    """
    global _config
    _config = dataclasses.replace(_config, connection_limit=connection_limit, proxy=proxy)
    logger.info(f"Configured connection limit {connection_limit}, proxy {_config.proxy or 'none'}")
    return _config


def set_default_encoding(encoding: Optional[str]) -> Config:
    """Set (or clear, with ``None``) the process-wide text encoding override."""
    global _config
    _config = dataclasses.replace(_config, default_encoding=encoding)
    logger.info(f"Default text encoding override set to {encoding or 'none'}")
    return _config


def reset_config() -> Config:
    """Restore the built-in defaults."""
    global _config
    _config = Config()
    return _config
