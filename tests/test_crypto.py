import base64

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from embystream.crypto import (
    CryptoOperation,
    decrypt,
    describe,
    encrypt,
    execute,
    normalize_key,
)
from embystream.errors import (
    Base64DecodeError,
    DecryptionError,
    EncryptionError,
    InvalidEncipherKeyError,
    JsonError,
)

KEY = "placeholder"
IV = "vector-1234"


def _raw_encrypt(plain: bytes) -> str:
    padder = padding.PKCS7(128).padder()
    padded = padder.update(plain) + padder.finalize()
    enc = Cipher(
        algorithms.AES(normalize_key(KEY)), modes.CBC(normalize_key(IV))
    ).encryptor()
    return base64.b64encode(enc.update(padded) + enc.finalize()).decode("ascii")


def test_normalize_pads_short_key():
    assert normalize_key("secret") == b"secret" + b"\x00" * 10


def test_normalize_truncates_long_key():
    assert normalize_key("placeholder-and-more") == b"placeholder-and-"


def test_normalize_rejects_short_key():
    with pytest.raises(InvalidEncipherKeyError) as info:
        normalize_key("token")
    assert info.value.length == 5


def test_roundtrip():
    data = {"item_id": "42", "path": "/media/films/a.mkv", "title": "Über"}
    encrypted = encrypt(data, KEY, IV)
    assert decrypt(encrypted, KEY, IV) == data


def test_roundtrip_empty_dict():
    assert decrypt(encrypt({}, KEY, IV), KEY, IV) == {}


def test_ciphertext_is_whole_blocks_and_deterministic():
    data = {"a": "b"}
    first = encrypt(data, KEY, IV)
    assert first == encrypt(data, KEY, IV)
    assert len(base64.b64decode(first)) % 16 == 0


def test_iv_changes_ciphertext():
    data = {"a": "b"}
    assert encrypt(data, KEY, IV) != encrypt(data, KEY, "other-vector")


def test_keys_beyond_sixteen_bytes_are_ignored():
    data = {"a": "b"}
    assert encrypt(data, "placeholder-extra", IV) == encrypt(
        data, "placeholder-extra-long", IV
    )


def test_encrypt_rejects_short_key():
    with pytest.raises(InvalidEncipherKeyError):
        encrypt({"a": "b"}, "token", IV)


def test_encrypt_rejects_non_string_values():
    with pytest.raises(JsonError):
        encrypt({"a": 1}, KEY, IV)


def test_decrypt_rejects_bad_base64():
    with pytest.raises(Base64DecodeError):
        decrypt("not base64!!", KEY, IV)


def test_decrypt_rejects_partial_block():
    with pytest.raises(DecryptionError):
        decrypt(base64.b64encode(b"abc").decode(), KEY, IV)


def test_decrypt_rejects_empty_ciphertext():
    with pytest.raises(DecryptionError):
        decrypt("", KEY, IV)


def test_decrypt_rejects_non_object_json():
    with pytest.raises(JsonError):
        decrypt(_raw_encrypt(b'["x"]'), KEY, IV)


def test_decrypt_rejects_non_json():
    with pytest.raises(JsonError):
        decrypt(_raw_encrypt(b"plain text"), KEY, IV)


def test_decrypt_reads_plain_json_object():
    assert decrypt(_raw_encrypt(b'{"k":"v"}'), KEY, IV) == {"k": "v"}


def test_execute_roundtrip():
    data = {"x": "y"}
    encrypted = execute(CryptoOperation.ENCRYPT, data, KEY, IV)
    assert encrypted == encrypt(data, KEY, IV)
    assert execute(CryptoOperation.DECRYPT, encrypted, KEY, IV) == data


def test_execute_encrypt_needs_dict():
    with pytest.raises(EncryptionError, match="expected dictionary"):
        execute(CryptoOperation.ENCRYPT, "text", KEY, IV)


def test_execute_decrypt_needs_string():
    with pytest.raises(DecryptionError, match="expected encrypted string"):
        execute(CryptoOperation.DECRYPT, {"a": "b"}, KEY, IV)


def test_operation_display():
    data = {"a": "b"}
    operations = [CryptoOperation.ENCRYPT, CryptoOperation.DECRYPT]
    encrypted = execute(operations[0], data, KEY, IV)
    assert execute(operations[1], encrypted, KEY, IV) == data
    assert [str(operation) for operation in operations] == ["Encrypt", "Decrypt"]


def test_describe_dictionary():
    assert describe({"a": "b", "c": "d"}) == "Dictionary { a: b, c: d }"


def test_describe_short_encrypted():
    assert describe("abc") == "Encrypted(abc)"


def test_describe_truncates_long_encrypted():
    text = "x" * 60
    result = describe(text)
    assert result == "Encrypted(" + "x" * 50 + "...)"