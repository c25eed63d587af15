"""
Text formatting for device and peer reports.

Every function here is pure: it takes snapshot data and returns a string.
"""
from datetime import datetime
from typing import Iterable, List, Optional

from wgshow.core.device import Device, IPNetwork, Peer
from wgshow.ui.ansi import bold, cyan, green, green_bold, yellow, yellow_bold

BYTE_UNIT = 1024
BYTE_PREFIXES = 'KMGTPE'

# (unit name, seconds per unit), largest first
TIME_UNITS = (
    ('day', 86400),
    ('hour', 3600),
    ('minute', 60),
)

NONE = '(none)'
INDENT = '  '


def plural(value: int, unit: str) -> str:
    """Pluralize only when value > 1, so 0 and 1 stay singular."""
    if value > 1:
        unit += 's'
    return cyan(unit)


def format_time_unit(value: int, unit: str) -> str:
    return f"{value} {plural(value, unit)}"


def format_duration(seconds: int) -> str:
    """
    Break a number of seconds into days, hours, minutes and seconds.

    Zero-valued units are dropped except seconds, which always ends the
    string. ``format_duration(3661)`` reads "1 hour, 1 minute, 1 second".
    """
    seconds = int(seconds)
    if seconds < 0:
        raise ValueError(f"duration must be non-negative, got {seconds}")

    parts = []
    remainder = seconds
    for unit, size in TIME_UNITS:
        value, remainder = divmod(remainder, size)
        if value > 0:
            parts.append(format_time_unit(value, unit))
    parts.append(format_time_unit(remainder, 'second'))
    return ', '.join(parts)


def format_bytes(count: int) -> str:
    """Render a byte count with binary (1024-based) units."""
    if count < 0:
        raise ValueError(f"byte count must be non-negative, got {count}")
    if count < BYTE_UNIT:
        return f"{count} {cyan('B')}"

    div, exp = BYTE_UNIT, 0
    n = count // BYTE_UNIT
    while n >= BYTE_UNIT and exp < len(BYTE_PREFIXES) - 1:
        div *= BYTE_UNIT
        exp += 1
        n //= BYTE_UNIT
    return f"{count / div:.1f} {cyan(BYTE_PREFIXES[exp] + 'iB')}"


def format_allowed_ips(ips: Iterable[IPNetwork]) -> str:
    text = ', '.join(str(ip) for ip in ips)
    if not text:
        return NONE
    return text.replace('/', cyan('/'))


def _field(label: str, value: str) -> str:
    return f"{INDENT}{bold(label)}: {value}"


def format_device(device: Device) -> str:
    """Interface block, terminated by a blank line."""
    lines = [
        f"{green_bold('interface')}: {green(device.name)} ({device.type})",
        _field('public key', device.public_key_b64),
        _field('private key', '(hidden)'),
        _field('listening port', str(device.listen_port)),
    ]
    return '\n'.join(lines) + '\n\n'


def format_peer(peer: Peer, now: Optional[datetime] = None) -> str:
    """
    Peer block, terminated by a blank line.

    Args:
        peer: Peer snapshot.
        now: Reference time for the handshake age. Defaults to the current time.
    """
    lines = [
        f"{yellow_bold('peer')}: {yellow(peer.public_key_b64)}",
        _field('endpoint', peer.endpoint or NONE),
        _field('allowed ips', format_allowed_ips(peer.allowed_ips)),
    ]

    if peer.last_handshake is not None:
        now = now or datetime.now(peer.last_handshake.tzinfo)
        elapsed = max(0, int((now - peer.last_handshake).total_seconds()))
        lines.append(_field('latest handshake', f"{format_duration(elapsed)} ago"))

    lines.extend([
        _field('transfer', f"{format_bytes(peer.receive_bytes)} received, "
                           f"{format_bytes(peer.transmit_bytes)} sent"),
        _field('persistent keepalive', f"every {format_duration(peer.persistent_keepalive)}"),
    ])
    return '\n'.join(lines) + '\n\n'


def render_report(devices: Iterable[Device], now: Optional[datetime] = None) -> str:
    """
    Render all devices and their peers in source order.

    Blank lines between blocks are kept; trailing newlines are removed.
    """
    blocks: List[str] = []
    for device in devices:
        blocks.append(format_device(device))
        for peer in device.peers:
            blocks.append(format_peer(peer, now))
    return ''.join(blocks).rstrip('\n')
