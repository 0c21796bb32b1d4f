import hashlib
from typing import Mapping, Sequence, Tuple, Union
from urllib.parse import urlencode

QueryParams = Union[str, Mapping[str, str], Sequence[Tuple[str, str]]]


def digest(message: str) -> str:
    """Hex encoded sha256 of `message`"""
    return hashlib.sha256(message.encode("utf-8")).hexdigest()


def make_cache_key(params: QueryParams, cache_epoch: str) -> str:
    """Provides a stable key for responses derived from immutable artifacts

    Args:
        params: the query the response was computed from. Mappings and pair
            sequences are url-encoded preserving their order.
        cache_epoch (str): prefix that can be changed to invalidate every key
            computed before

    Returns:
        str: the hex digest of `"{cache_epoch}-{query}"`
    """
    query = params if isinstance(params, str) else urlencode(params)
    return digest(f"{cache_epoch}-{query}")
