"""
WireGuard device and peer snapshots.

Records are built once from the control interface and only read
afterwards, so both are frozen dataclasses.
"""
import base64
import binascii
import ipaddress
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple, Union

from .exceptions import DeviceParseError

KEY_LEN = 32

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def decode_key(text: str) -> bytes:
    """
    Decode a base64 WireGuard key.

    Args:
        text: Standard base64 text as printed by ``wg``.

    Returns:
        The raw 32-byte key.

    Raises:
        DeviceParseError: If the text is not valid base64 or has the wrong length.
    """
    try:
        key = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DeviceParseError(f"invalid key {text!r}: {e}")
    if len(key) != KEY_LEN:
        raise DeviceParseError(f"invalid key {text!r}: expected {KEY_LEN} bytes, got {len(key)}")
    return key


def encode_key(key: bytes) -> str:
    return base64.b64encode(key).decode('ascii')


@dataclass(frozen=True)
class Peer:
    """A remote peer configured on a device."""
    public_key: bytes
    endpoint: Optional[str] = None
    allowed_ips: Tuple[IPNetwork, ...] = ()
    last_handshake: Optional[datetime] = None
    receive_bytes: int = 0
    transmit_bytes: int = 0
    persistent_keepalive: int = 0

    @property
    def public_key_b64(self) -> str:
        return encode_key(self.public_key)


@dataclass(frozen=True)
class Device:
    """A local WireGuard interface. The private key is never stored."""
    name: str
    type: str
    public_key: bytes
    listen_port: int
    peers: Tuple[Peer, ...] = field(default_factory=tuple)

    @property
    def public_key_b64(self) -> str:
        return encode_key(self.public_key)
