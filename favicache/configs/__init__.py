"""Configuration for favicache"""

from pathlib import Path

from dynaconf import Dynaconf, Validator

# Validators for favicache settings.
_validators = [
    Validator("logging.format", is_in=["mozlog", "pretty"]),
    Validator("logging.level", is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    Validator("logging.can_propagate", is_type_of=bool),
    # Unrecognized provider modes fall back to "chain" at runtime, so only the type is checked.
    Validator("favicon.provider", is_type_of=str, must_exist=True),
    Validator("favicon.icon_size", is_type_of=int, gt=0, lte=512),
    Validator("favicon.cache.backend", is_in=["file", "redis", "memory", "none"]),
    Validator("favicon.cache.namespace", is_type_of=str, must_exist=True),
    Validator("favicon.cache.version", is_type_of=str, must_exist=True),
    Validator("favicon.cache.success_ttl_sec", is_type_of=int, gt=0),
    Validator("favicon.cache.failure_ttl_sec", is_type_of=int, gt=0),
    Validator("favicon.cache.max_entries", is_type_of=int, gte=1),
    Validator(
        "favicon.cache.file_root",
        is_type_of=str,
        must_exist=True,
        when=Validator("favicon.cache.backend", eq="file"),
    ),
    # The Redis server URL is required when the store is kept in Redis.
    Validator(
        "redis.server",
        is_type_of=str,
        must_exist=True,
        when=Validator("favicon.cache.backend", eq="redis"),
    ),
    Validator("redis.db", is_type_of=int, gte=0),
    Validator("redis.socket_connect_timeout_sec", is_type_of=int, gte=0),
    Validator("redis.socket_timeout_sec", is_type_of=int, gte=0),
]

# `root_path` = The package directory, so settings files resolve from any working directory.
# `envvar_prefix` = Export envvars with `export FAVICACHE_FOO=bar`.
# `settings_files` = Load these files in the order.
# `environments` = Enable layered environments such as `development`, `production`, `testing` etc.
# `env_switcher` = Switch environments by `export FAVICACHE_ENV=production`. Default: `development`.
# `merge_enabled` = Environment tables are merged into `default` instead of replacing it.
# `validators` = Define validators for favicache settings.

settings = Dynaconf(
    root_path=str(Path(__file__).parent.parent),
    envvar_prefix="FAVICACHE",
    settings_files=[
        "configs/default.toml",
        "configs/development.toml",
        "configs/production.toml",
        "configs/testing.toml",
    ],
    environments=True,
    env_switcher="FAVICACHE_ENV",
    merge_enabled=True,
    validators=_validators,
)
