"""HTTP transfer infrastructure for pyhttpget (sync-only).

Uses httpx directly; one client per call unless the caller passes its own.
"""

from pyhttpget.http.client import create_client
from pyhttpget.http.cookies import load_cookies_from_file
from pyhttpget.http.headers import load_headers_from_file
from pyhttpget.http.params import decode_params, encode_params
from pyhttpget.http.progress import TqdmProgress
from pyhttpget.http.request import (
    RequestMutator,
    build_get_request,
    build_post_request,
)
from pyhttpget.http.transfer import (
    UNKNOWN_LENGTH,
    download_file,
    get_stream,
    get_text,
    post_stream,
    post_text,
)

__all__ = [
    "create_client",
    "load_cookies_from_file",
    "load_headers_from_file",
    "decode_params",
    "encode_params",
    "TqdmProgress",
    "RequestMutator",
    "build_get_request",
    "build_post_request",
    "UNKNOWN_LENGTH",
    "download_file",
    "get_stream",
    "get_text",
    "post_stream",
    "post_text",
]
