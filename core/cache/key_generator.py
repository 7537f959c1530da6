"""
Cache key generation utilities for QuorumCal.
"""

import hashlib
import json


def secure_hash(data, length=16, used_for_security=False):
    """
    Create a hash of data using SHA-256

    Args:
        data: String or bytes to hash
        length: Length of the resulting hash digest to return (truncated)
        used_for_security: Whether this hash is used for security purposes

    Returns:
        Truncated hexadecimal digest
    """
    if isinstance(data, str):
        data = data.encode()

    return hashlib.sha256(data, usedforsecurity=used_for_security).hexdigest()[:length]


def generate_cache_key(key, namespace=None, version=None):
    """
    Generate a standardized cache key.

    Dict keys are serialized with sorted keys and hashed, so secrets such as
    feed tokens never appear in the cache backend in clear text.

    Args:
        key (str | dict): Base cache key
        namespace (str): Optional namespace
        version (str): Optional version

    Returns:
        str: Formatted cache key
    """
    if isinstance(key, dict):
        serialized = json.dumps(key, sort_keys=True, default=str)
        key = secure_hash(serialized, length=32)

    parts = []
    if namespace:
        parts.append(namespace)

    parts.append(str(key))

    if version:
        parts.append(f"v{version}")

    return ":".join(parts)
