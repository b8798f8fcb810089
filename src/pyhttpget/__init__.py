"""
pyhttpget - Simple synchronous HTTP transfers.

This package provides one-call GET and POST helpers that return decoded text
or stream the body to a file-like sink with progress reporting, plus small
helpers for extracting delimited substrings from the returned text.
"""

__version__ = "1.0.0"

from pyhttpget.config import Config, get_config, set_default_encoding, setup
from pyhttpget.exceptions import (
    EncodingError,
    HttpUtilityError,
    InvalidConfig,
    InvalidRequest,
    TransportError,
)
from pyhttpget.http import (
    RequestMutator,
    TqdmProgress,
    download_file,
    get_stream,
    get_text,
    post_stream,
    post_text,
)
from pyhttpget.utils.text import ScanCursor, extract_between, find_all_between, find_between

__all__ = [
    "Config",
    "get_config",
    "set_default_encoding",
    "setup",
    "EncodingError",
    "HttpUtilityError",
    "InvalidConfig",
    "InvalidRequest",
    "TransportError",
    "RequestMutator",
    "TqdmProgress",
    "download_file",
    "get_stream",
    "get_text",
    "post_stream",
    "post_text",
    "ScanCursor",
    "extract_between",
    "find_all_between",
    "find_between",
    "__version__",
]
