"""Custom exceptions for wgshow."""
class WgShowError(Exception):
    """Base exception for all wgshow errors."""
    pass

class ControlInterfaceError(WgShowError):
    """Raised when the WireGuard control interface cannot be used."""
    pass

class DeviceQueryError(WgShowError):
    """Raised when devices cannot be enumerated or fetched."""
    pass

class DeviceNotFoundError(DeviceQueryError):
    """Raised when a named device does not exist."""
    def __init__(self, name: str, cause: str = "no such device"):
        self.name = name
        self.cause = cause
        super().__init__(cause)

class DeviceParseError(DeviceQueryError):
    """Raised when the control interface returns data that cannot be parsed."""
    pass

class ConfigurationError(WgShowError):
    """Raised when the wgshow configuration cannot be loaded."""
    pass
