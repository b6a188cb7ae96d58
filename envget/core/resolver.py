"""
Resolution of a single configuration value from the environment

Sources are tried in order, first success wins:

1. ``<NAME>_FILE``: path to a file holding the value
2. ``<NAME>``: tried as a path to a file holding the value
3. ``<NAME>``: the literal value, if the variable is set at all
4. the caller's default

A successful file read ends the search even when its content does not
convert; the default is returned in that case.
"""
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, TypeVar, Union

from envget.core.config import get_settings
from envget.core.converters import ValueKind, convert
from envget.core.logging_config import describe_secret

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ValueSource(str, Enum):
    """Where a resolved value came from"""
    FILE_ENV = "file_env"  # <NAME>_FILE pointed at a readable file
    PATH_ENV = "path_env"  # <NAME> pointed at a readable file
    ENV = "env"  # literal <NAME>
    DEFAULT = "default"


def _read_file(variable: str, path: str, encoding: str) -> Optional[str]:
    """Whole-file text read, None when the file cannot be read"""
    try:
        return Path(path).read_text(encoding=encoding, errors="replace")
    except (OSError, ValueError) as e:
        # ValueError: embedded NUL in the path
        logger.debug("%s is not a readable file path (%s)", variable, e.__class__.__name__)
        return None


def _converted(name: str, raw: str, default: Any, kind, source: ValueSource) -> Tuple[Any, ValueSource]:
    value = convert(raw, default, kind)
    if get_settings().log_sensitive_data:
        shown = repr(value)
    else:
        shown = describe_secret(value)
    logger.debug("%s resolved from %s (%s)", name, source.value, shown)
    return value, source


def resolve_with_source(
    name: str,
    default: T,
    *,
    kind: Optional[Union[ValueKind, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Tuple[T, ValueSource]:
    """Resolve ``name`` and report which source produced the value.

    Args:
        name: Variable name, without the file suffix
        default: Fallback value; its type selects the conversion
        kind: Explicit conversion kind (e.g. ``ValueKind.INT32``)
        environ: Environment mapping, ``os.environ`` when omitted

    Returns:
        Tuple of (value, source)
    """
    if kind is not None:
        kind = ValueKind.parse(kind)
    env = os.environ if environ is None else environ
    settings = get_settings()

    file_path = (env.get(name + settings.file_suffix) or "").strip()
    if file_path:
        content = _read_file(name + settings.file_suffix, file_path, settings.file_encoding)
        if content is not None:
            return _converted(name, content, default, kind, ValueSource.FILE_ENV)

    path = (env.get(name) or "").strip()
    if path:
        content = _read_file(name, path, settings.file_encoding)
        if content is not None:
            return _converted(name, content, default, kind, ValueSource.PATH_ENV)

    # second lookup of the same variable: the raw value, unstripped
    if name in env:
        return _converted(name, env[name], default, kind, ValueSource.ENV)

    logger.debug("%s not set, using default", name)
    return default, ValueSource.DEFAULT


def resolve(
    name: str,
    default: T,
    *,
    kind: Optional[Union[ValueKind, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> T:
    """Resolve a configuration value from ``<name>_FILE``, ``<name>`` or ``default``.

    Never raises for missing variables, unreadable files or malformed
    values; those fall back as described in the module docstring.

    Example:
        >>> timeout = resolve("HTTP_TIMEOUT", timedelta(seconds=30))
        >>> workers = resolve("WORKERS", 4)
    """
    value, _ = resolve_with_source(name, default, kind=kind, environ=environ)
    return value
