"""
Exception types for envget

ConversionError never leaves the package: converters raise it and
``convert`` turns it into the caller's default.
"""


class EnvGetError(Exception):
    """Base class for envget errors"""


class ConversionError(EnvGetError, ValueError):
    """Raw text could not be parsed into the requested kind"""

    def __init__(self, kind: str, raw: str, reason: str = ""):
        self.kind = kind
        self.raw = raw
        self.reason = reason
        message = f"cannot convert to {kind}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedKindError(EnvGetError, TypeError):
    """An explicit kind was requested that envget does not know"""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"unsupported value kind: {kind!r}")
