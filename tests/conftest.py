# tests/conftest.py
"""
Pytest fixtures for the wgshow tests.
"""
import base64
import ipaddress
from datetime import datetime

import pytest

from wgshow.core.device import Device, Peer


@pytest.fixture
def device_key():
    """Raw public key of the test interface"""
    return bytes(32)


@pytest.fixture
def peer_key():
    """Raw public key of the test peer"""
    return bytes(range(1, 33))


@pytest.fixture
def peer(peer_key):
    """Peer with no endpoint and no handshake"""
    return Peer(
        public_key=peer_key,
        endpoint=None,
        allowed_ips=(ipaddress.ip_network('10.0.0.2/32'),),
        last_handshake=None,
        receive_bytes=2048,
        transmit_bytes=512,
        persistent_keepalive=25
    )


@pytest.fixture
def device(device_key, peer):
    """wg0 with a single peer"""
    return Device(
        name='wg0',
        type='wireguard',
        public_key=device_key,
        listen_port=51820,
        peers=(peer,)
    )


@pytest.fixture
def now():
    return datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def b64():
    def encode(key):
        return base64.b64encode(key).decode('ascii')
    return encode


@pytest.fixture
def all_dump(device_key, peer_key, b64):
    """Output of `wg show all dump` for two interfaces"""
    other_peer = bytes(range(100, 132))
    return "\n".join([
        f"wg0\t{b64(bytes(range(50, 82)))}\t{b64(device_key)}\t51820\toff",
        f"wg0\t{b64(peer_key)}\t(none)\t(none)\t10.0.0.2/32\t0\t2048\t512\t25",
        f"wg0\t{b64(other_peer)}\t(none)\t203.0.113.5:51820\t10.0.0.3/32,fd00::3/128\t1714564800\t1536\t1048576\toff",
        f"wg1\t{b64(bytes(range(200, 232)))}\t{b64(peer_key)}\t51821\toff",
        ""
    ])
