"""
wgshow
Colorized status viewer for WireGuard interfaces and peers.
"""
from .wgshow import VERSION as __version__, cli
