# /wgshow/wgshow.py
#!/usr/bin/env python3
"""
wgshow - Colorized status viewer for WireGuard interfaces and peers.
"""
import sys
import logging
from typing import Optional

import click

from wgshow.core.client import WgClient
from wgshow.core.config import load_settings
from wgshow.core.exceptions import (
    ConfigurationError,
    ControlInterfaceError,
    DeviceQueryError
)
from wgshow.core.utils import setup_logging
from wgshow.ui.console import ConsoleUI
from wgshow.ui.format import render_report

VERSION = "1.0.0"
logger = logging.getLogger(__name__)


def fail(ui: ConsoleUI, message: str, debug: bool = False):
    """Report a fatal error and exit non-zero."""
    logger.error(message)
    ui.print_error(message, show_traceback=debug)
    sys.exit(1)


@click.command()
@click.version_option(version=VERSION, prog_name='wgshow')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Path to a YAML configuration file')
@click.argument('device', required=False)
def cli(debug: bool, config_path: Optional[str], device: Optional[str]):
    """Show WireGuard interfaces and peers.

    With no DEVICE every interface is listed.
    """
    ui = ConsoleUI()
    setup_logging(debug)

    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        fail(ui, str(e), debug)
    debug = debug or settings.debug
    try:
        setup_logging(debug, settings.log_file)
    except ConfigurationError as e:
        fail(ui, str(e), debug)

    try:
        client = WgClient.open(settings)
    except ControlInterfaceError as e:
        fail(ui, f"failed to open wireguard control interface: {e}", debug)

    with client:
        if device:
            try:
                devices = [client.device(device)]
            except (DeviceQueryError, ControlInterfaceError) as e:
                fail(ui, f'failed to get device "{device}": {e}', debug)
        else:
            try:
                devices = client.devices()
            except (DeviceQueryError, ControlInterfaceError) as e:
                fail(ui, f"failed to get devices: {e}", debug)

    logger.debug(f"Rendering {len(devices)} devices")
    ui.print_report(render_report(devices))


if __name__ == '__main__':
    cli()
