"""Configuration sections for the streaming frontend and its backends."""

from __future__ import annotations

import dataclasses
import enum
from typing import Any, Mapping, Optional, Union

from .errors import ConfigError
from .privacy import desensitize

DEFAULT_STREAM_PORT = "443"
_MAX_PORT = 0xFFFF
_MAX_U64 = 2**64 - 1
_MISSING = object()

_GENERAL_FIELDS = (
    "log_level",
    "backend_type",
    "encipher_key",
    "cache_ttl_seconds",
    "api_key",
)


def _require_mapping(data: object, owner: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ConfigError(f"invalid type for {owner}: expected a table")
    return data


def _get_str(data: Mapping[str, Any], owner: str, name: str, default: Any = _MISSING) -> Any:
    if name not in data:
        if default is _MISSING:
            raise ConfigError(f"missing field `{name}` in {owner}")
        return default
    value = data[name]
    if not isinstance(value, str):
        raise ConfigError(f"invalid type for field `{name}` in {owner}: expected a string")
    return value


def _get_optional_str(data: Mapping[str, Any], owner: str, name: str) -> Optional[str]:
    if data.get(name) is None:
        return None
    return _get_str(data, owner, name)


def _get_int(data: Mapping[str, Any], owner: str, name: str, upper: int) -> int:
    if name not in data:
        raise ConfigError(f"missing field `{name}` in {owner}")
    value = data[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"invalid type for field `{name}` in {owner}: expected an integer")
    if not 0 <= value <= upper:
        raise ConfigError(f"invalid value for field `{name}` in {owner}: {value} is out of range")
    return value


class BackendType(enum.Enum):
    """Where media is streamed from."""

    DISK = "disk"
    DIRECT_LINK = "direct_link"
    ALIST = "alist"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: object) -> "BackendType":
        """Read a backend type by its configuration name."""
        try:
            return cls(text)
        except ValueError:
            names = ", ".join(f"`{member.value}`" for member in cls)
            raise ConfigError(f"unknown variant `{text}`, expected one of {names}") from None


@dataclasses.dataclass(frozen=True)
class AListConfig:
    """Settings of the AList backend."""

    base_url: str
    token: str
    path_replace_rule_regex: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AListConfig":
        owner = "AListConfig"
        data = _require_mapping(data, owner)
        return cls(
            base_url=_get_str(data, owner, "base_url"),
            token=_get_str(data, owner, "token"),
            path_replace_rule_regex=_get_str(data, owner, "path_replace_rule_regex", ""),
        )

    def __str__(self) -> str:
        return (
            f"AListConfig {{ base_url: {self.base_url}, "
            f"token: {desensitize(self.token)}, "
            f"path_replace_rule_regex: {self.path_replace_rule_regex} }}"
        )


@dataclasses.dataclass(frozen=True)
class DirectLinkConfig:
    """Settings of the direct-link backend."""

    base_url: str
    stream_port: str = DEFAULT_STREAM_PORT
    path_replace_rule_regex: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DirectLinkConfig":
        owner = "DirectLinkConfig"
        data = _require_mapping(data, owner)
        return cls(
            base_url=_get_str(data, owner, "base_url"),
            stream_port=_get_str(data, owner, "stream_port", DEFAULT_STREAM_PORT),
            path_replace_rule_regex=_get_str(data, owner, "path_replace_rule_regex", ""),
        )

    def __str__(self) -> str:
        return (
            f"DirectLinkConfig {{ base_url: {self.base_url}, "
            f"stream_port: {self.stream_port}, "
            f"path_replace_rule_regex: {self.path_replace_rule_regex} }}"
        )


@dataclasses.dataclass(frozen=True)
class DiskConfig:
    """Settings of the local-disk backend."""

    listen_port: int
    stream_url: str
    stream_port: str = DEFAULT_STREAM_PORT
    storage_base_path: Optional[str] = None
    path_replace_rule_regex: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiskConfig":
        owner = "DiskConfig"
        data = _require_mapping(data, owner)
        return cls(
            listen_port=_get_int(data, owner, "listen_port", _MAX_PORT),
            stream_url=_get_str(data, owner, "stream_url"),
            stream_port=_get_str(data, owner, "stream_port", DEFAULT_STREAM_PORT),
            storage_base_path=_get_optional_str(data, owner, "storage_base_path"),
            path_replace_rule_regex=_get_str(data, owner, "path_replace_rule_regex", ""),
        )

    def __str__(self) -> str:
        base_path = self.storage_base_path if self.storage_base_path is not None else "None"
        return (
            f"DiskConfig {{ listen_port: {self.listen_port}, "
            f"stream_url: {self.stream_url}, "
            f"stream_port: {self.stream_port}, "
            f"storage_base_path: {base_path}, "
            f"path_replace_rule_regex: {self.path_replace_rule_regex} }}"
        )


@dataclasses.dataclass(frozen=True)
class GeneralConfig:
    """Settings of the [General] section."""

    log_level: str
    backend_type: BackendType
    encipher_key: str
    cache_ttl_seconds: int
    api_key: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GeneralConfig":
        owner = "GeneralConfig"
        data = _require_mapping(data, owner)
        values: dict[str, Any] = {}
        for name in _GENERAL_FIELDS:
            if name == "cache_ttl_seconds":
                values[name] = _get_int(data, owner, name, _MAX_U64)
            elif name == "backend_type":
                values[name] = BackendType.parse(_get_str(data, owner, name))
            else:
                values[name] = _get_str(data, owner, name)
        return cls(**values)

    def __str__(self) -> str:
        return (
            f"GeneralConfig {{ log_level: {self.log_level}, "
            f"backend_type: {self.backend_type}, "
            f"encipher_key: {desensitize(self.encipher_key)}, "
            f"cache_ttl_seconds: {self.cache_ttl_seconds}, "
            f"api_key: {desensitize(self.api_key)} }}"
        )


BackendConfig = Union[DiskConfig, AListConfig, DirectLinkConfig]

_BACKEND_KINDS: dict[str, type] = {
    "Disk": DiskConfig,
    "AList": AListConfig,
    "DirectLink": DirectLinkConfig,
}
_BACKEND_LABELS = {kind: label for label, kind in _BACKEND_KINDS.items()}


def parse_backend(data: Mapping[str, Any]) -> Optional[BackendConfig]:
    """Read the backend from a document's ``type`` and ``config`` keys.

    Returns None when the document names no backend type.
    """
    data = _require_mapping(data, "configuration")
    if "type" not in data:
        return None
    type_name = data["type"]
    kind = _BACKEND_KINDS.get(type_name) if isinstance(type_name, str) else None
    if kind is None:
        names = ", ".join(f"`{name}`" for name in _BACKEND_KINDS)
        raise ConfigError(f"unknown variant `{type_name}`, expected one of {names}")
    if "config" not in data:
        raise ConfigError("missing field `config`")
    return kind.from_dict(data["config"])


def describe_backend(backend: Optional[BackendConfig]) -> str:
    """Render a backend configuration as ``Kind(details)``, or ``None``."""
    if backend is None:
        return "None"
    label = _BACKEND_LABELS.get(type(backend))
    if label is None:
        raise TypeError(f"not a backend configuration: {backend!r}")
    return f"{label}({backend})"