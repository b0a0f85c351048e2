"""
mergebom.config - Merge run configuration.

All tunables of a merge run live in ``MergeConfig``. ``MergeConfig.from_env``
builds one from ``MERGEBOM_*`` environment variables for unattended use.
"""

import os
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Tuple

from .errors import ConfigError
from .schema import MERGE_FIELD_NAMES

DEFAULT_MERGE_FIELDS: Tuple[str, ...] = ("comment", "footprint", "description")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def normalize_merge_fields(names: Iterable[str]) -> Tuple[str, ...]:
    """Lower-case, validate and de-duplicate merge field names, keeping order.

    Raises:
        ConfigError: If a name is not an allowed merge field
    """
    result = []
    for name in names:
        key = str(name).strip().lower()
        if not key:
            continue
        if key == "mount_technology":
            key = "mounttechnology"
        if key not in MERGE_FIELD_NAMES:
            raise ConfigError(
                f"Unknown merge field {name!r}. Allowed: {', '.join(MERGE_FIELD_NAMES)}"
            )
        if key not in result:
            result.append(key)
    return tuple(result)


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class MergeConfig:
    """Settings for one merge run.

    An empty ``merge_fields`` means every row gets a random key and nothing
    is merged.
    """

    merge_fields: Tuple[str, ...] = DEFAULT_MERGE_FIELDS
    sort_extra_headers: bool = False
    extended_rewrites: bool = False
    normalize_values: bool = False
    expand_designator_ranges: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "merge_fields", normalize_merge_fields(self.merge_fields))

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "MergeConfig":
        env = os.environ if env is None else env

        merge_fields = DEFAULT_MERGE_FIELDS
        if "MERGEBOM_MERGE_FIELDS" in env:
            merge_fields = tuple(env["MERGEBOM_MERGE_FIELDS"].split(","))

        seed = None
        raw_seed = env.get("MERGEBOM_SEED", "").strip()
        if raw_seed:
            try:
                seed = int(raw_seed)
            except ValueError:
                raise ConfigError(f"MERGEBOM_SEED must be an integer, got {raw_seed!r}")

        return cls(
            merge_fields=merge_fields,
            sort_extra_headers=_env_flag(env, "MERGEBOM_SORT_EXTRA_HEADERS"),
            extended_rewrites=_env_flag(env, "MERGEBOM_EXTENDED_REWRITES"),
            normalize_values=_env_flag(env, "MERGEBOM_NORMALIZE_VALUES"),
            expand_designator_ranges=_env_flag(env, "MERGEBOM_EXPAND_RANGES"),
            seed=seed,
        )
