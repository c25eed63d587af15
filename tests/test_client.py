# tests/test_client.py

import ipaddress
import subprocess
from datetime import datetime
from unittest import mock

import pytest

from wgshow.core.client import KERNEL_TYPE, USERSPACE_TYPE, WgClient, parse_dump
from wgshow.core.config import Settings
from wgshow.core.device import decode_key
from wgshow.core.exceptions import (
    ControlInterfaceError,
    DeviceNotFoundError,
    DeviceParseError,
    DeviceQueryError
)


def completed(stdout):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr='')


@pytest.fixture
def settings(tmp_path):
    return Settings(runtime_dir=str(tmp_path))


@pytest.fixture
def client(settings):
    return WgClient('/usr/bin/wg', settings)


# Parsing Tests
def test_parse_dump_devices_and_peers(all_dump, device_key, peer_key, tmp_path):
    devices = parse_dump(all_dump.splitlines(), str(tmp_path))

    assert [d.name for d in devices] == ['wg0', 'wg1']
    wg0 = devices[0]
    assert wg0.public_key == device_key
    assert wg0.listen_port == 51820
    assert wg0.type == KERNEL_TYPE
    assert len(wg0.peers) == 2
    assert devices[1].peers == ()

    first, second = wg0.peers
    assert first.public_key == peer_key
    assert first.endpoint is None
    assert first.allowed_ips == (ipaddress.ip_network('10.0.0.2/32'),)
    assert first.last_handshake is None
    assert first.receive_bytes == 2048
    assert first.transmit_bytes == 512
    assert first.persistent_keepalive == 25

    assert second.endpoint == '203.0.113.5:51820'
    assert second.allowed_ips == (
        ipaddress.ip_network('10.0.0.3/32'),
        ipaddress.ip_network('fd00::3/128'),
    )
    assert second.last_handshake == datetime.fromtimestamp(1714564800)
    assert second.persistent_keepalive == 0


def test_parse_dump_userspace_type(all_dump, tmp_path):
    (tmp_path / 'wg1.sock').touch()
    devices = parse_dump(all_dump.splitlines(), str(tmp_path))
    assert devices[0].type == KERNEL_TYPE
    assert devices[1].type == USERSPACE_TYPE


def test_parse_dump_never_keeps_private_key(all_dump, tmp_path):
    device = parse_dump(all_dump.splitlines(), str(tmp_path))[0]
    assert not hasattr(device, 'private_key')


def test_parse_dump_no_allowed_ips(b64, device_key, peer_key, tmp_path):
    lines = [
        f"wg0\t{b64(device_key)}\t{b64(device_key)}\t51820\toff",
        f"wg0\t{b64(peer_key)}\t(none)\t(none)\t(none)\t0\t0\t0\toff",
    ]
    peer = parse_dump(lines, str(tmp_path))[0].peers[0]
    assert peer.allowed_ips == ()


@pytest.mark.parametrize('line', [
    "wg0\tonly\tthree",
    "wg9\t{key}\t(none)\t(none)\t10.0.0.2/32\t0\t0\t0\toff",
])
def test_parse_dump_malformed(line, b64, peer_key, tmp_path):
    with pytest.raises(DeviceParseError):
        parse_dump([line.format(key=b64(peer_key))], str(tmp_path))


def test_parse_dump_bad_counter(b64, device_key, peer_key, tmp_path):
    lines = [
        f"wg0\t{b64(device_key)}\t{b64(device_key)}\t51820\toff",
        f"wg0\t{b64(peer_key)}\t(none)\t(none)\t10.0.0.2/32\t0\tlots\t0\toff",
    ]
    with pytest.raises(DeviceParseError):
        parse_dump(lines, str(tmp_path))


def test_decode_key_rejects_bad_input():
    with pytest.raises(DeviceParseError):
        decode_key('not base64!')
    with pytest.raises(DeviceParseError):
        decode_key('AAAA')


# Client Tests
def test_open_missing_binary():
    with mock.patch('wgshow.core.client.shutil.which', return_value=None):
        with pytest.raises(ControlInterfaceError):
            WgClient.open(Settings(wg_binary='wg-missing'))


def test_open_finds_binary():
    with mock.patch('wgshow.core.client.shutil.which', return_value='/usr/bin/wg'):
        client = WgClient.open()
    assert client.binary == '/usr/bin/wg'
    assert not client.closed


def test_devices(client, all_dump):
    with mock.patch('wgshow.core.client.subprocess.run', return_value=completed(all_dump)) as run:
        devices = client.devices()
    run.assert_called_once()
    assert run.call_args[0][0] == ['/usr/bin/wg', 'show', 'all', 'dump']
    assert [d.name for d in devices] == ['wg0', 'wg1']


def test_device_by_name(client, b64, device_key, peer_key):
    dump = "\n".join([
        f"{b64(device_key)}\t{b64(device_key)}\t51820\toff",
        f"{b64(peer_key)}\t(none)\t(none)\t10.0.0.2/32\t0\t2048\t512\t25",
        ""
    ])
    with mock.patch('wgshow.core.client.subprocess.run', return_value=completed(dump)) as run:
        device = client.device('wg0')
    assert run.call_args[0][0] == ['/usr/bin/wg', 'show', 'wg0', 'dump']
    assert device.name == 'wg0'
    assert device.peers[0].public_key == peer_key


def test_device_not_found(client):
    error = subprocess.CalledProcessError(1, ['wg'], output='',
                                          stderr='Unable to access interface: No such device\n')
    with mock.patch('wgshow.core.client.subprocess.run', side_effect=error):
        with pytest.raises(DeviceNotFoundError) as exc_info:
            client.device('wg9')
    assert exc_info.value.name == 'wg9'
    assert 'No such device' in str(exc_info.value)


def test_devices_query_failure(client):
    error = subprocess.CalledProcessError(1, ['wg'], output='', stderr='Operation not permitted\n')
    with mock.patch('wgshow.core.client.subprocess.run', side_effect=error):
        with pytest.raises(DeviceQueryError, match='Operation not permitted'):
            client.devices()


def test_sudo_prefix(all_dump, tmp_path):
    client = WgClient('/usr/bin/wg', Settings(use_sudo=True, runtime_dir=str(tmp_path)))
    with mock.patch('wgshow.core.client.subprocess.run', return_value=completed(all_dump)) as run:
        client.devices()
    assert run.call_args[0][0][:3] == ['sudo', '-n', '/usr/bin/wg']


def test_closed_client_refuses_queries(client):
    with client:
        pass
    assert client.closed
    with pytest.raises(ControlInterfaceError):
        client.devices()
