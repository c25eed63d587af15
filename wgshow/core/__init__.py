# Import exception classes for convenience
from .exceptions import (
    WgShowError,
    ControlInterfaceError,
    DeviceQueryError,
    DeviceNotFoundError,
    DeviceParseError,
    ConfigurationError
)
