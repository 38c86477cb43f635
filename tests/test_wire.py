import struct

import pytest

from fastqueue.enums import ErrorCode, RequestType, ResponseValueKey
from fastqueue.wire import (
    ErrorResponse,
    build_error_response,
    build_ping_request,
    parse_error_response,
)


def test_ping_request_bytes():
    frame = build_ping_request()
    assert frame == b"\x09\x00\x00\x00" + b"\x00\x00\x00\x00" + b"\x01"


def test_ping_request_size_prefix_matches_length():
    frame = build_ping_request()
    (size,) = struct.unpack_from("<I", frame)
    assert size == len(frame)
    assert struct.unpack_from("<i", frame, 4)[0] == RequestType.NONE


def test_error_response_layout():
    frame = build_error_response(ErrorCode.QUEUE_DOES_NOT_EXIST, "missing")
    size, code, key, msg_len = struct.unpack_from("<Iiii", frame)
    assert size == len(frame)
    assert code == ErrorCode.QUEUE_DOES_NOT_EXIST
    assert key == ResponseValueKey.ERROR_MESSAGE
    assert msg_len == len("missing")
    assert frame[16:] == b"missing"


def test_error_response_round_trip():
    frame = build_error_response(ErrorCode.UNAUTHORIZED, "Not allowed")
    parsed = parse_error_response(frame[4:])
    assert parsed == ErrorResponse(ErrorCode.UNAUTHORIZED, "Not allowed")


def test_error_response_round_trip_unicode_and_empty():
    frame = build_error_response(ErrorCode.INTERNAL_SERVER_ERROR, "błąd")
    assert parse_error_response(frame[4:]).error_message == "błąd"
    empty = build_error_response(ErrorCode.INCORRECT_ACTION, "")
    parsed = parse_error_response(empty[4:])
    assert parsed.error_message == ""
    assert parsed.error_code == ErrorCode.INCORRECT_ACTION


def test_parse_truncated_raises():
    frame = build_error_response(ErrorCode.UNAUTHORIZED, "Not allowed")
    with pytest.raises(ValueError):
        parse_error_response(frame[4:-3])


def test_parse_without_message_raises():
    with pytest.raises(ValueError):
        parse_error_response(struct.pack("<i", ErrorCode.UNAUTHORIZED))


def test_parse_unknown_code_raises():
    with pytest.raises(ValueError):
        parse_error_response(struct.pack("<i", 999))