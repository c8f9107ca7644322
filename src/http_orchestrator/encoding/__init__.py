"""Transfer codings."""

from .chunked import decode, is_chunked, looks_like_chunked

__all__ = ["decode", "is_chunked", "looks_like_chunked"]
