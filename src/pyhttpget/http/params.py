"""Form-style parameter encoding.

Parameters are encoded exactly as an HTML form would submit them
(``application/x-www-form-urlencoded``). The same encoding is used for GET
query strings and POST bodies.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, quote_plus

from pyhttpget.exceptions import InvalidRequest

RequestParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def _iter_params(params: RequestParams) -> Iterable[Tuple[str, Any]]:
    if isinstance(params, Mapping):
        return params.items()
    return params


def encode_params(params: Optional[RequestParams]) -> str:
    """Encode parameters as ``key=value`` pairs joined by ``&``.

    Pairs are emitted in insertion order. ``None`` values are encoded as
    an empty string; other values are converted with ``str()``.

    Args:
        params: Mapping or iterable of ``(key, value)`` pairs

    Returns:
        Encoded string, empty if there are no parameters

    Raises:
        InvalidRequest: If a key is ``None``

    Example:
        >>> encode_params({"q": "a b", "page": 2, "empty": None})
        'q=a+b&page=2&empty='
    """
    if not params:
        return ""

    pairs = []
    for key, value in _iter_params(params):
        if key is None:
            raise InvalidRequest("Parameter keys must not be None")
        encoded_value = "" if value is None else quote_plus(str(value), encoding="utf-8")
        pairs.append(f"{quote_plus(str(key), encoding='utf-8')}={encoded_value}")

    return "&".join(pairs)


def decode_params(query: str) -> List[Tuple[str, str]]:
    """Decode a form-encoded string back into ordered ``(key, value)`` pairs.

    Blank values are kept, so ``decode_params(encode_params(p))`` returns
    every pair of ``p`` with ``None`` values turned into ``""``.
    """
    return parse_qsl(query, keep_blank_values=True, encoding="utf-8")
