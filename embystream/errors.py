"""Exception types raised across the package."""

from __future__ import annotations


class EmbyStreamError(Exception):
    """Base class for every error the package raises."""


class _DetailError(EmbyStreamError):
    """An error whose message is a fixed prefix followed by a detail."""

    prefix = "Error"

    def __init__(self, detail: object) -> None:
        self.detail = str(detail)
        super().__init__(f"{self.prefix}: {self.detail}")


class ConfigError(_DetailError):
    """The configuration text could not be parsed."""

    prefix = "TOML parse error"


class InvalidEncipherKeyError(EmbyStreamError):
    """An encipher key has an unusable length."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Encipher key must be 16 bytes, got {length} bytes")


class MissingGeneralSectionError(EmbyStreamError):
    """The configuration file has no [General] section."""

    def __init__(self) -> None:
        super().__init__("No [General] section found in config file")


class InvalidBackendConfigError(EmbyStreamError):
    """The backend configuration does not match the backend type."""

    def __init__(self, backend_type: object) -> None:
        self.backend_type = backend_type
        super().__init__(
            f"Invalid backend configuration for backend type: {backend_type}"
        )


class JsonError(_DetailError):
    """JSON could not be serialized or deserialized."""

    prefix = "JSON error"


class Base64DecodeError(_DetailError):
    """A Base64 string could not be decoded."""

    prefix = "Base64 decode error"


class EncryptionError(_DetailError):
    """Encryption failed."""

    prefix = "Encryption error"


class DecryptionError(_DetailError):
    """Decryption failed."""

    prefix = "Decryption error"