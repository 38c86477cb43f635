"""Binary frames exchanged over internal connections: pings and error replies."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from fastqueue.enums import ErrorCode, RequestType, ResponseValueKey

_UINT = struct.Struct("<I")
_INT = struct.Struct("<i")
_ENUM = struct.Struct("<i")
_BOOL = struct.Struct("<?")


@dataclass(frozen=True)
class ErrorResponse:
    """A decoded error reply."""

    error_code: ErrorCode
    error_message: str


def build_ping_request() -> bytes:
    """Return the frame sent to keep pooled connections alive.

    Layout: total size (uint32), request type ``NONE`` (int32), success flag (bool).
    """
    total = _UINT.size + _ENUM.size + _BOOL.size
    return _UINT.pack(total) + _ENUM.pack(RequestType.NONE) + _BOOL.pack(True)


def build_error_response(error_code: ErrorCode, error_message: str) -> bytes:
    """Return an error reply frame.

    Layout: total size (uint32), error code (int32), value key
    ``ERROR_MESSAGE`` (int32), message length (int32), message bytes.
    """
    message = error_message.encode("utf-8")
    total = _UINT.size + _ENUM.size + len(message) + _INT.size + _ENUM.size
    return b"".join(
        (
            _UINT.pack(total),
            _ENUM.pack(int(error_code)),
            _ENUM.pack(ResponseValueKey.ERROR_MESSAGE),
            _INT.pack(len(message)),
            message,
        )
    )


def parse_error_response(data: bytes) -> ErrorResponse:
    """Decode the body of an error reply, i.e. the frame without its size prefix.

    Raises ValueError if the body is truncated or holds no error message.
    """
    view = memoryview(data)
    offset = 0

    def take(fmt: struct.Struct) -> int:
        nonlocal offset
        if offset + fmt.size > len(view):
            raise ValueError("Truncated error response")
        (value,) = fmt.unpack_from(view, offset)
        offset += fmt.size
        return value

    raw_code = take(_ENUM)
    try:
        error_code = ErrorCode(raw_code)
    except ValueError as exc:
        raise ValueError(f"Unknown error code {raw_code}") from exc

    while offset < len(view):
        key = take(_ENUM)
        if key != ResponseValueKey.ERROR_MESSAGE:
            raise ValueError(f"Unexpected response value key {key}")
        size = take(_INT)
        if size < 0 or offset + size > len(view):
            raise ValueError("Error message length exceeds response size")
        message = bytes(view[offset : offset + size]).decode("utf-8", errors="replace")
        return ErrorResponse(error_code, message)

    raise ValueError("Error response holds no error message")