"""Header file parsing.

Extra request headers can be kept in a plain text file and applied to every
client built from a :class:`~pyhttpget.config.Config`.
"""

from pathlib import Path
from typing import Dict


def load_headers_from_file(header_file: str) -> Dict[str, str]:
    """Load HTTP headers from a ``Name: value`` file.

    Blank lines and lines starting with ``#`` are ignored, as are lines
    without a colon. A later line wins over an earlier one with the same
    name (compared case-insensitively).

    Args:
        header_file: Path to header file

    Returns:
        Dictionary of header name to value, empty if the file is missing

    Example file format:
        Accept: text/html
        Referer: https://example.com/
    """
    headers: Dict[str, str] = {}
    header_path = Path(header_file)

    if not header_path.is_file():
        return headers

    with open(header_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#') or ':' not in line:
                continue

            name, value = line.split(':', 1)
            name = name.strip()
            if not name:
                continue

            for existing in [k for k in headers if k.lower() == name.lower()]:
                del headers[existing]
            headers[name] = value.strip()

    return headers
