"""
envget - typed configuration values from environment variables and files
"""
import logging

from envget.core.converters import ValueKind, convert
from envget.core.durations import parse_duration
from envget.core.exceptions import ConversionError, EnvGetError, UnsupportedKindError
from envget.core.resolver import ValueSource, resolve, resolve_with_source

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConversionError",
    "EnvGetError",
    "UnsupportedKindError",
    "ValueKind",
    "ValueSource",
    "convert",
    "parse_duration",
    "resolve",
    "resolve_with_source",
]
