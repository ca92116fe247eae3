import pytest

from embystream.errors import (
    Base64DecodeError,
    ConfigError,
    DecryptionError,
    EmbyStreamError,
    EncryptionError,
    InvalidBackendConfigError,
    InvalidEncipherKeyError,
    JsonError,
    MissingGeneralSectionError,
)


def test_invalid_encipher_key_message_and_length():
    err = InvalidEncipherKeyError(5)
    assert str(err) == "Encipher key must be 16 bytes, got 5 bytes"
    assert err.length == 5


def test_missing_general_section_message():
    assert str(MissingGeneralSectionError()) == "No [General] section found in config file"


def test_invalid_backend_config_message():
    err = InvalidBackendConfigError("disk")
    assert str(err) == "Invalid backend configuration for backend type: disk"
    assert err.backend_type == "disk"


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (ConfigError, "TOML parse error"),
        (JsonError, "JSON error"),
        (Base64DecodeError, "Base64 decode error"),
        (EncryptionError, "Encryption error"),
        (DecryptionError, "Decryption error"),
    ],
)
def test_detail_errors_prefix_their_message(cls, prefix):
    err = cls("broken input")
    assert str(err) == f"{prefix}: broken input"
    assert err.detail == "broken input"


@pytest.mark.parametrize(
    "cls, args, message",
    [
        (InvalidEncipherKeyError, (3,), "Encipher key must be 16 bytes, got 3 bytes"),
        (MissingGeneralSectionError, (), "No [General] section found in config file"),
        (
            InvalidBackendConfigError,
            ("alist",),
            "Invalid backend configuration for backend type: alist",
        ),
        (ConfigError, ("z",), "TOML parse error: z"),
        (JsonError, ("j",), "JSON error: j"),
        (Base64DecodeError, ("b",), "Base64 decode error: b"),
        (DecryptionError, ("x",), "Decryption error: x"),
        (EncryptionError, ("y",), "Encryption error: y"),
    ],
)
def test_all_errors_share_base(cls, args, message):
    err = cls(*args)
    assert isinstance(err, EmbyStreamError)
    assert str(err) == message