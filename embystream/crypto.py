"""AES-128-CBC encryption of string dictionaries to Base64 text."""

from __future__ import annotations

import base64
import binascii
import enum
import json
from typing import Mapping, Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import (
    Base64DecodeError,
    DecryptionError,
    EncryptionError,
    InvalidEncipherKeyError,
    JsonError,
)
from .logger import CRYPTO_LOGGER_DOMAIN, error_log, info_log

KEY_SIZE = 16
MIN_KEY_SIZE = 6
_DESCRIBE_LIMIT = 50


class CryptoOperation(enum.Enum):
    """Which way a cryptographic operation goes."""

    ENCRYPT = "Encrypt"
    DECRYPT = "Decrypt"

    def __str__(self) -> str:
        return self.value


def normalize_key(key: Union[str, bytes]) -> bytes:
    """Bring a key or IV to 16 bytes.

    Shorter than 6 bytes is an error; up to 16 bytes is padded with zero
    bytes; anything longer is truncated.
    """
    raw = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if len(raw) < MIN_KEY_SIZE:
        error_log(
            f"Encryption key must be at least 6 bytes, got {len(raw)} bytes",
            CRYPTO_LOGGER_DOMAIN,
        )
        raise InvalidEncipherKeyError(len(raw))
    return raw[:KEY_SIZE].ljust(KEY_SIZE, b"\x00")


def _cipher(key: str, iv: str) -> Cipher:
    return Cipher(algorithms.AES(normalize_key(key)), modes.CBC(normalize_key(iv)))


def _check_string_dict(data: object) -> dict:
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise JsonError("expected an object mapping strings to strings")
    return data


def encrypt(data: Mapping[str, str], key: str, iv: str) -> str:
    """Encrypt a string dictionary as JSON and return it Base64-encoded."""
    info_log("Starting AES encryption for dictionary", CRYPTO_LOGGER_DOMAIN)
    try:
        plain = json.dumps(
            _check_string_dict(dict(data)), ensure_ascii=False, separators=(",", ":")
        ).encode("utf-8")
    except (JsonError, TypeError, ValueError) as exc:
        error_log(f"Failed to serialize dictionary to JSON: {exc}", CRYPTO_LOGGER_DOMAIN)
        raise exc if isinstance(exc, JsonError) else JsonError(exc) from exc

    cipher = _cipher(key, iv)
    try:
        padder = padding.PKCS7(128).padder()
        padded = padder.update(plain) + padder.finalize()
        encryptor = cipher.encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
    except ValueError as exc:
        error_log(f"Encryption failed: {exc}", CRYPTO_LOGGER_DOMAIN)
        raise EncryptionError(exc) from exc

    info_log("Encryption successful, produced Base64 string", CRYPTO_LOGGER_DOMAIN)
    return base64.b64encode(ciphertext).decode("ascii")


def decrypt(encrypted: str, key: str, iv: str) -> dict[str, str]:
    """Decrypt a Base64 string produced by :func:`encrypt` back to a dictionary."""
    info_log("Starting AES decryption for Base64 string", CRYPTO_LOGGER_DOMAIN)
    try:
        decoded = base64.b64decode(encrypted, validate=True)
    except (binascii.Error, ValueError) as exc:
        error_log(f"Failed to decode Base64 string: {exc}", CRYPTO_LOGGER_DOMAIN)
        raise Base64DecodeError(exc) from exc

    cipher = _cipher(key, iv)
    try:
        decryptor = cipher.decryptor()
        padded = decryptor.update(decoded) + decryptor.finalize()
        unpadder = padding.PKCS7(128).unpadder()
        plain = unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        error_log(f"Decryption failed: {exc}", CRYPTO_LOGGER_DOMAIN)
        raise DecryptionError(exc) from exc

    try:
        result = _check_string_dict(json.loads(plain.decode("utf-8")))
    except (JsonError, UnicodeDecodeError, ValueError) as exc:
        error_log(
            f"Failed to deserialize JSON to dictionary: {exc}", CRYPTO_LOGGER_DOMAIN
        )
        raise exc if isinstance(exc, JsonError) else JsonError(exc) from exc

    info_log("Decryption successful, restored dictionary", CRYPTO_LOGGER_DOMAIN)
    return result


def execute(
    operation: CryptoOperation,
    data: Union[Mapping[str, str], str],
    key: str,
    iv: str,
) -> Union[str, dict[str, str]]:
    """Encrypt a dictionary or decrypt a Base64 string, as ``operation`` says."""
    info_log(f"Executing cryptographic operation: {operation}", CRYPTO_LOGGER_DOMAIN)
    if operation is CryptoOperation.ENCRYPT:
        if not isinstance(data, Mapping):
            error_log(
                "Invalid input for encryption: expected dictionary", CRYPTO_LOGGER_DOMAIN
            )
            raise EncryptionError("Invalid input: expected dictionary")
        return encrypt(data, key, iv)
    if not isinstance(data, str):
        error_log(
            "Invalid input for decryption: expected encrypted string",
            CRYPTO_LOGGER_DOMAIN,
        )
        raise DecryptionError("Invalid input: expected encrypted string")
    return decrypt(data, key, iv)


def describe(value: Union[Mapping[str, str], str]) -> str:
    """Render an operation's input or output for display.

    Dictionaries list their pairs; encrypted strings longer than 50
    characters are truncated.
    """
    if isinstance(value, Mapping):
        pairs = ", ".join(f"{k}: {v}" for k, v in value.items())
        return f"Dictionary {{ {pairs} }}"
    if len(value) > _DESCRIBE_LIMIT:
        return f"Encrypted({value[:_DESCRIBE_LIMIT]}...)"
    return f"Encrypted({value})"