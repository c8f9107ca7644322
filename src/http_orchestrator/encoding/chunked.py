# src/http_orchestrator/encoding/chunked.py
"""
Chunked transfer coding (RFC 7230 section 4.1), whole-buffer decoding.

Wire format::

    <hex-size>[;ext...]\\r\\n
    <chunk-data>\\r\\n
    ...
    0\\r\\n
    [trailer-fields]\\r\\n

Chunk extensions and trailer fields are ignored.

Example:
    >>> decode(b"5\\r\\nhello\\r\\n6\\r\\n world\\r\\n0\\r\\n\\r\\n")
    b'hello world'
"""

from typing import Optional, Union

from ..core.exceptions import MalformedChunkedBodyError

CRLF = b"\r\n"

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")

BytesLike = Union[bytes, bytearray, memoryview]


def _parse_chunk_size(line: bytes, offset: int) -> int:
    """
    Parse one chunk-size line (without its CRLF).

    Args:
        line: Raw size line, possibly carrying ``;ext`` parameters
        offset: Position of the line in the encoded buffer (for errors)

    Returns:
        Chunk size in bytes

    Raises:
        MalformedChunkedBodyError: If the size is not an unsigned hex number
    """
    size_field = line.split(b";", 1)[0].strip()

    # int(x, 16) accepts "+", "-", "0x" and "_" - chunk-size does not
    if not size_field or any(byte not in _HEX_DIGITS for byte in size_field):
        raise MalformedChunkedBodyError(f"invalid chunk size {bytes(size_field)!r}", offset)

    return int(size_field, 16)


def decode(encoded: BytesLike) -> bytes:
    """
    Decode a complete chunked-encoded body.

    Args:
        encoded: Chunked body as received on the wire

    Returns:
        The concatenated chunk data

    Raises:
        MalformedChunkedBodyError: Missing CRLF, non-hex size or truncated chunk
        TypeError: If ``encoded`` is text rather than bytes

    Examples:
        >>> decode(b"5\\r\\nhello\\r\\n0\\r\\n\\r\\n")
        b'hello'
        >>> decode(b"0\\r\\n\\r\\n")
        b''
    """
    if isinstance(encoded, str):
        raise TypeError("chunked body must be bytes, not str")

    data = bytes(encoded)
    result = bytearray()
    pos = 0

    while pos < len(data):
        size_end = data.find(CRLF, pos)
        if size_end == -1:
            raise MalformedChunkedBodyError("chunk size line is not terminated by CRLF", pos)

        chunk_size = _parse_chunk_size(data[pos:size_end], pos)
        pos = size_end + len(CRLF)

        if chunk_size == 0:
            # last-chunk; trailer section is not surfaced
            break

        if pos + chunk_size > len(data):
            raise MalformedChunkedBodyError(
                f"chunk declares {chunk_size} bytes, only {len(data) - pos} available", pos
            )

        chunk_end = pos + chunk_size
        if data[chunk_end:chunk_end + len(CRLF)] != CRLF:
            raise MalformedChunkedBodyError("chunk data is not followed by CRLF", chunk_end)

        result += data[pos:chunk_end]
        pos = chunk_end + len(CRLF)

    return bytes(result)


def looks_like_chunked(data: BytesLike) -> bool:
    """
    Heuristic: does ``data`` start with a hex size line?

    Looks for hex digits followed by CRLF within the first 10 bytes.

    Examples:
        >>> looks_like_chunked(b"1a\\r\\ndata")
        True
        >>> looks_like_chunked(b"hello world")
        False
    """
    data = bytes(data[:10])
    if len(data) < 3:
        return False

    for i, byte in enumerate(data):
        if byte == 0x0D:  # \r
            return i > 0 and data[i + 1:i + 2] == b"\n"
        if byte not in _HEX_DIGITS:
            return False

    return False


def is_chunked(transfer_encoding: Optional[str]) -> bool:
    """Whether a Transfer-Encoding header value includes ``chunked``."""
    if not transfer_encoding:
        return False
    return "chunked" in transfer_encoding.lower()
