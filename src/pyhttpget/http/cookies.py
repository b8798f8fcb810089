"""Netscape cookie file support.

Reads the tab-separated format written by browsers' export tools and curl
(``# domain flag path secure expiration name value``) into an
:class:`httpx.Cookies` jar.
"""

import logging
import time
from pathlib import Path
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# curl marks HttpOnly cookies by prefixing the domain
HTTP_ONLY_PREFIX = '#HttpOnly_'


def load_cookies_from_file(cookie_file: str, now: Optional[float] = None) -> httpx.Cookies:
    """Load cookies from a Netscape cookie file.

    Expired cookies and malformed lines are skipped. An expiration of ``0``
    marks a session cookie, which is always kept.

    Args:
        cookie_file: Path to cookie file
        now: Reference time for expiry checks (defaults to the current time)

    Returns:
        Cookie jar, empty if the file is missing
    """
    cookies = httpx.Cookies()
    cookie_path = Path(cookie_file)

    if not cookie_path.is_file():
        return cookies

    if now is None:
        now = time.time()

    with open(cookie_path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()

            if line.startswith(HTTP_ONLY_PREFIX):
                line = line[len(HTTP_ONLY_PREFIX):]
            elif not line or line.startswith('#'):
                continue

            parts = line.split('\t')
            if len(parts) < 7:
                logger.debug(f"Skipping malformed cookie line {line_no} in {cookie_file}")
                continue

            domain, _flag, path, _secure, expiration, name, value = parts[:7]

            try:
                expires = int(expiration)
            except ValueError:
                expires = 0

            if expires and expires < now:
                continue

            cookies.set(name, value, domain=domain, path=path or '/')

    return cookies
