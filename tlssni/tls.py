"""Extract the Server Name Indication hostname from a TLS ClientHello.

This is a minimal TLS parser: it reads just enough of the first handshake
record to find the ``server_name`` extension and return the first
``host_name`` entry in it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

__all__ = [
    "TlsParseError",
    "IncompleteRequest",
    "NoHostname",
    "InvalidClientHello",
    "Protocol",
    "TLS_PROTOCOL",
    "parse_tls_header",
    "parse_extensions",
    "parse_server_name_extension",
]

log = logging.getLogger(__name__)

TLS_HEADER_LEN = 5
TLS_HANDSHAKE_CONTENT_TYPE = 0x16
TLS_HANDSHAKE_TYPE_CLIENT_HELLO = 0x01
_SERVER_NAME_EXTENSION = b"\x00\x00"
_HOST_NAME_TYPE = 0x00

# Handshake type (1), length (3), version (2) and random (32).
_FIXED_HELLO_FIELDS = 38


class TlsParseError(ValueError):
    """Base class for every failure to obtain a hostname from a packet."""


class IncompleteRequest(TlsParseError):
    """More data is needed before the record can be parsed."""


class NoHostname(TlsParseError):
    """The packet is well formed but carries no server name."""


class InvalidClientHello(TlsParseError):
    """The packet is not a valid TLS ClientHello."""


def _u16(data: bytes, pos: int) -> int:
    return (data[pos] << 8) + data[pos + 1]


def parse_tls_header(data: bytes | bytearray | memoryview) -> str:
    """Return the first SNI hostname of the TLS ClientHello in ``data``."""
    data = bytes(data)

    if len(data) < TLS_HEADER_LEN:
        raise IncompleteRequest("shorter than a TLS record header")

    # SSL 2.0 compatible ClientHello: high bit of the length, type ClientHello.
    if data[0] & 0x80 and data[2] == 1:
        log.debug("Received SSL 2.0 Client Hello which can not support SNI.")
        raise NoHostname("SSL 2.0 ClientHello carries no server name")

    if data[0] != TLS_HANDSHAKE_CONTENT_TYPE:
        log.debug("Request did not begin with TLS handshake.")
        raise InvalidClientHello("record is not a TLS handshake")

    major, minor = data[1], data[2]
    # A major version byte with the high bit set counts as below 3.
    if major < 3 or major >= 0x80:
        log.debug(
            "Received SSL %d.%d handshake which can not support SNI.",
            major - 0x100 if major >= 0x80 else major,
            minor,
        )
        raise NoHostname("handshake version predates SNI")

    record_len = _u16(data, 3) + TLS_HEADER_LEN
    if len(data) < record_len:
        raise IncompleteRequest("TLS record not yet complete")
    data = data[:record_len]
    end = len(data)
    pos = TLS_HEADER_LEN

    if pos + 1 > end:
        raise InvalidClientHello("empty handshake record")
    if data[pos] != TLS_HANDSHAKE_TYPE_CLIENT_HELLO:
        log.debug("Not a client hello")
        raise InvalidClientHello("handshake is not a ClientHello")

    pos += _FIXED_HELLO_FIELDS

    # Session ID
    if pos + 1 > end:
        raise InvalidClientHello("truncated session id")
    pos += 1 + data[pos]

    # Cipher suites
    if pos + 2 > end:
        raise InvalidClientHello("truncated cipher suites")
    pos += 2 + _u16(data, pos)

    # Compression methods
    if pos + 1 > end:
        raise InvalidClientHello("truncated compression methods")
    pos += 1 + data[pos]

    if pos == end and major == 3 and minor == 0:
        log.debug("Received SSL 3.0 handshake without extensions")
        raise NoHostname("SSL 3.0 handshake without extensions")

    # Extensions
    if pos + 2 > end:
        raise InvalidClientHello("truncated extensions length")
    length = _u16(data, pos)
    pos += 2
    if pos + length > end:
        raise InvalidClientHello("extensions overrun the record")
    return parse_extensions(data[pos:pos + length])


def parse_extensions(data: bytes | bytearray | memoryview) -> str:
    """Find the server_name extension in an extensions block and parse it."""
    data = bytes(data)
    end = len(data)
    pos = 0
    while pos + 4 <= end:
        length = _u16(data, pos + 2)
        if data[pos:pos + 2] == _SERVER_NAME_EXTENSION:
            # Only one extension of each type may appear.
            if pos + 4 + length > end:
                raise InvalidClientHello("server_name extension overruns block")
            return parse_server_name_extension(data[pos + 4:pos + 4 + length])
        pos += 4 + length
    if pos != end:
        raise InvalidClientHello("extensions block has trailing garbage")
    raise NoHostname("no server_name extension")


def parse_server_name_extension(data: bytes | bytearray | memoryview) -> str:
    """Return the first host_name entry of a server_name extension body."""
    data = bytes(data)
    end = len(data)
    pos = 2  # skip the server name list length
    while pos + 3 < end:
        length = _u16(data, pos + 1)
        if pos + 3 + length > end:
            raise InvalidClientHello("server name entry overruns extension")
        name_type = data[pos]
        if name_type == _HOST_NAME_TYPE:
            raw = data[pos + 3:pos + 3 + length]
            return raw.split(b"\x00", 1)[0].decode("latin-1")
        log.debug(
            "Unknown server name extension name type: %d",
            name_type - 0x100 if name_type >= 0x80 else name_type,
        )
        pos += 3 + length
    if pos != end:
        raise InvalidClientHello("server name list has trailing garbage")
    raise NoHostname("server_name extension holds no host_name")


@dataclass(frozen=True)
class Protocol:
    """A sniffable protocol: its default port and its hostname parser."""

    default_port: int
    parser: Callable[[bytes], str]

    def parse_packet(self, data: bytes | bytearray | memoryview) -> str:
        """Return the hostname carried by the first packet of a connection."""
        return self.parser(data)


TLS_PROTOCOL = Protocol(default_port=443, parser=parse_tls_header)