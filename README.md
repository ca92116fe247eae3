# embystream

Building blocks for an Emby streaming service that keeps its frontend and
backend apart.

## Modules

- `embystream.config`: typed settings for the service.
  - `BackendType` (`DISK`, `DIRECT_LINK`, `ALIST`, named `disk`,
    `direct_link` and `alist`). `BackendType.parse` reads one by that name.
  - `DiskConfig`, `AListConfig`, `DirectLinkConfig` and `GeneralConfig`,
    each built from a mapping with `from_dict`. Missing optional fields take
    their defaults (`stream_port` is `"443"`, `path_replace_rule_regex` is
    empty, `storage_base_path` is `None`). Missing required fields, wrong
    types and out-of-range numbers raise `ConfigError`.
  - `parse_backend` reads a mapping with a `type` key (`Disk`, `AList` or
    `DirectLink`) and a `config` table, and returns the matching settings,
    or `None` when there is no `type` key.
  - `describe_backend` renders settings as `Kind(...)`. When settings are
    printed, tokens, encipher keys and API keys are masked.
- `embystream.cache`: a thread-safe in-memory `Cache`. Each entry expires
  after a time to live. Once the cache is over capacity, the oldest inserted
  entries are evicted first. Inserting a key again refreshes its age.
  Configure a cache with `CacheBuilder` (`with_max_capacity`,
  `with_max_alive_seconds`, `build`). `get_instance()` returns one shared
  cache that holds 2000 entries for 30 minutes each.
- `embystream.crypto`: AES-128-CBC encryption of string-to-string
  dictionaries into Base64 tokens.
  - `encrypt` and `decrypt` do the two directions.
  - `execute` runs the direction given by a `CryptoOperation`.
  - `describe` renders an input or output for display.
  - `normalize_key` brings a key or IV to 16 bytes. It pads shorter values
    with zero bytes and truncates longer ones. Keys and IVs shorter than
    6 bytes raise `InvalidEncipherKeyError`.
- `embystream.logger`: console and file logging.
  - `LoggerBuilder` sets the level (`LogLevel`), the directory (`logs` by
    default), the file prefix and the rotation (`LogRotation.MINUTELY`,
    `HOURLY`, `DAILY` or `NEVER`). `LogRotation.NEVER` needs a prefix.
  - The `EMBYSTREAM_LOG` environment variable, when set to a level name,
    overrides the configured level.
  - `trace_log`, `debug_log`, `info_log`, `warn_log` and `error_log` write
    messages prefixed with `[DOMAIN]`. The prefix is `[GENERAL]` unless a
    domain is given.
- `embystream.privacy`: `desensitize` shows the first four characters of a
  secret and masks the rest.
- `embystream.errors`: the exceptions above, all derived from
  `EmbyStreamError`.

## Installation

```
pip install .
```

## Usage

```python
from embystream.cache import CacheBuilder
from embystream.crypto import encrypt, decrypt

cache = CacheBuilder().with_max_capacity(100).with_max_alive_seconds(60).build()
cache.insert("item", {"path": "/media/movie.mkv"})
print(cache.get("item"))

token = encrypt({"item_id": "42"}, "secret", "placeholder")
print(decrypt(token, "secret", "placeholder"))
```

```python
from embystream.config import parse_backend, describe_backend

backend = parse_backend({
    "type": "AList",
    "config": {"base_url": "http://localhost:5244", "token": "token"},
})
print(describe_backend(backend))
```

## Command

```
embystream
```

The command sets up logging at debug level, with output to the console and
to daily files under `./logs`. It then logs that the application is
starting and exits. `embystream --help` shows its usage.

## What it does not do

- The package does not read a whole configuration file from disk, and it
  does not write one. It builds settings only from mappings you have
  already parsed.
- It does not check that the encipher key is 16 bytes long, and it does
  not generate API keys.
- It runs no streaming server and serves no media. The `embystream`
  command only sets up logging.

## Tests

```
pip install .[test]
pytest
```