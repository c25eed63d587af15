"""
WireGuard control interface client.

Queries devices through the ``wg`` tool's ``dump`` output and turns it into
:class:`~wgshow.core.device.Device` snapshots.
"""
import ipaddress
import logging
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from .config import Settings
from .device import KEY_LEN, Device, Peer, decode_key
from .exceptions import (
    ControlInterfaceError,
    DeviceNotFoundError,
    DeviceParseError,
    DeviceQueryError
)

logger = logging.getLogger('wgshow.client')

NONE = '(none)'
INTERFACE_FIELDS = 5
PEER_FIELDS = 9
KERNEL_TYPE = 'Linux kernel'
USERSPACE_TYPE = 'userspace'


class WgClient:
    """Handle on the WireGuard control interface."""

    def __init__(self, binary: str, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.binary = binary
        self.closed = False

    @classmethod
    def open(cls, settings: Optional[Settings] = None) -> 'WgClient':
        """
        Locate the ``wg`` tool and return a client bound to it.

        Raises:
            ControlInterfaceError: If the tool cannot be found.
        """
        settings = settings or Settings()
        binary = shutil.which(settings.wg_binary)
        if binary is None:
            raise ControlInterfaceError(f"{settings.wg_binary}: executable not found")
        logger.debug(f"Using wg binary at {binary}")
        return cls(binary, settings)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def devices(self) -> List[Device]:
        """Return every device in the order ``wg`` reports them."""
        output = self._run(['show', 'all', 'dump'])
        return parse_dump(output.splitlines(), self.settings.runtime_dir)

    def device(self, name: str) -> Device:
        """
        Return a single device by interface name.

        Raises:
            DeviceNotFoundError: If no such interface exists.
        """
        try:
            output = self._run(['show', name, 'dump'])
        except DeviceQueryError as e:
            if 'no such device' in str(e).lower() or 'not a wireguard interface' in str(e).lower():
                raise DeviceNotFoundError(name, str(e))
            raise
        # Single-device dumps omit the leading interface column.
        lines = [f"{name}\t{line}" for line in output.splitlines() if line]
        devices = parse_dump(lines, self.settings.runtime_dir)
        if not devices:
            raise DeviceNotFoundError(name)
        return devices[0]

    def _run(self, args: List[str]) -> str:
        if self.closed:
            raise ControlInterfaceError("client is closed")
        command = [self.binary] + args
        if self.settings.use_sudo:
            command = ['sudo', '-n'] + command
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(command, capture_output=True, text=True, check=True)
        except FileNotFoundError as e:
            raise ControlInterfaceError(str(e))
        except subprocess.CalledProcessError as e:
            message = (e.stderr or '').strip() or f"{command[0]} exited with status {e.returncode}"
            raise DeviceQueryError(message)
        return result.stdout


def parse_dump(lines: List[str], runtime_dir: str = '/var/run/wireguard') -> List[Device]:
    """
    Parse ``wg show all dump`` output.

    Args:
        lines: Dump lines, each prefixed with the interface name.
        runtime_dir: Directory holding userspace implementation sockets.

    Returns:
        Devices with their peers, in input order.

    Raises:
        DeviceParseError: On malformed lines or peers of an unknown interface.
    """
    interfaces: Dict[str, dict] = {}

    for line in lines:
        if not line.strip():
            continue
        parts = line.split('\t')
        if len(parts) == INTERFACE_FIELDS:
            name = parts[0]
            interfaces[name] = {
                'name': name,
                'type': interface_type(name, runtime_dir),
                'public_key': _parse_public_key(parts[2]),
                'listen_port': _parse_int(parts[3], 'listening port'),
                'peers': []
            }
        elif len(parts) == PEER_FIELDS:
            name = parts[0]
            if name not in interfaces:
                raise DeviceParseError(f"peer listed for unknown interface {name!r}")
            interfaces[name]['peers'].append(_parse_peer(parts[1:]))
        else:
            raise DeviceParseError(f"unexpected dump line with {len(parts)} fields")

    devices = []
    for fields in interfaces.values():
        fields['peers'] = tuple(fields['peers'])
        devices.append(Device(**fields))
    logger.debug(f"Parsed {len(devices)} devices")
    return devices


def interface_type(name: str, runtime_dir: str) -> str:
    """Userspace implementations expose a UAPI socket; kernel ones do not."""
    if (Path(runtime_dir) / f"{name}.sock").exists():
        return USERSPACE_TYPE
    return KERNEL_TYPE


def _parse_peer(parts: List[str]) -> Peer:
    # public, preshared (discarded), endpoint, allowed ips, handshake, rx, tx, keepalive
    public, _, endpoint, allowed, handshake, rx, tx, keepalive = parts
    handshake_ts = _parse_int(handshake, 'latest handshake')
    return Peer(
        public_key=decode_key(public),
        endpoint=None if endpoint == NONE else endpoint,
        allowed_ips=_parse_allowed_ips(allowed),
        last_handshake=datetime.fromtimestamp(handshake_ts) if handshake_ts else None,
        receive_bytes=_parse_int(rx, 'receive bytes'),
        transmit_bytes=_parse_int(tx, 'transmit bytes'),
        persistent_keepalive=0 if keepalive == 'off' else _parse_int(keepalive, 'persistent keepalive')
    )


def _parse_public_key(text: str) -> bytes:
    if text == NONE:
        return bytes(KEY_LEN)
    return decode_key(text)


def _parse_allowed_ips(text: str):
    if text == NONE or not text:
        return ()
    try:
        return tuple(ipaddress.ip_network(ip, strict=False) for ip in text.split(','))
    except ValueError as e:
        raise DeviceParseError(f"invalid allowed ips {text!r}: {e}")


def _parse_int(text: str, what: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise DeviceParseError(f"invalid {what}: {text!r}")
    if value < 0:
        raise DeviceParseError(f"invalid {what}: {text!r}")
    return value
