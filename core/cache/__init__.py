from .key_generator import generate_cache_key, secure_hash

__all__ = ["generate_cache_key", "secure_hash"]
