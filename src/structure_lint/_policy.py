"""The policy: built once, validated once, never touched again.

Defaults come from _laws. The adopting repository can override them in
its pyproject.toml ([tool.structure_lint]) or in a standalone TOML file
passed with --config. Anything that doesn't validate stops the run
before a single path is visited.
"""

import os
import re
from dataclasses import dataclass, field, replace

from structure_lint import _laws


class PolicyError(ValueError):
    """The policy itself is broken: bad regex, bad limit, bad key."""


@dataclass(frozen=True)
class PolicyConfig:
    required_paths: tuple = _laws.REQUIRED_PATHS
    forbidden_paths: tuple = _laws.FORBIDDEN_PATHS
    max_segment_len: int = _laws.MAX_SEGMENT_LEN
    segment_regex: re.Pattern = field(default_factory=lambda: re.compile(_laws.SEGMENT_REGEX))
    ext_regex: re.Pattern = field(default_factory=lambda: re.compile(_laws.EXT_REGEX))
    allow_special_filenames: frozenset = frozenset(_laws.ALLOW_SPECIAL_FILENAMES)
    skip_path_regex: re.Pattern = field(default_factory=lambda: re.compile(_laws.SKIP_PATH_REGEX))
    allow_duplicate_basenames: frozenset = frozenset(_laws.ALLOW_DUPLICATE_BASENAMES)
    hash_globs: tuple = _laws.HASH_GLOBS
    max_hash_bytes: int = _laws.MAX_HASH_BYTES

    def __post_init__(self):
        for name in ("max_segment_len", "max_hash_bytes"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise PolicyError(f"{name} must be a positive integer, got {value!r}")
        # Strings are accepted and compiled; anything else is a caller bug.
        for name in ("segment_regex", "ext_regex", "skip_path_regex"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, _compile(name, value))
            elif not isinstance(value, re.Pattern):
                raise PolicyError(f"{name} must be a regex, got {value!r}")

    def is_skipped(self, rel, is_dir=False):
        if is_dir:
            rel += "/"
        return self.skip_path_regex.search(rel) is not None

    def describe(self):
        """(label, value) rows for --show-policy."""
        return [
            ("required paths", ", ".join(self.required_paths) or "-"),
            ("forbidden paths", ", ".join(self.forbidden_paths) or "-"),
            ("max segment length", str(self.max_segment_len)),
            ("segment pattern", self.segment_regex.pattern),
            ("extension pattern", self.ext_regex.pattern),
            ("special filenames", ", ".join(sorted(self.allow_special_filenames)) or "-"),
            ("skip pattern", self.skip_path_regex.pattern),
            ("duplicate allowlist", ", ".join(sorted(self.allow_duplicate_basenames)) or "-"),
            ("hash globs", ", ".join(self.hash_globs) or "-"),
            ("max hash bytes", str(self.max_hash_bytes)),
        ]


# key -> (dataclass field, kind). Kinds drive validation in _coerce.
_KEYS = {
    "required-paths": ("required_paths", "paths"),
    "forbidden-paths": ("forbidden_paths", "paths"),
    "max-segment-len": ("max_segment_len", "int"),
    "segment-regex": ("segment_regex", "regex"),
    "ext-regex": ("ext_regex", "regex"),
    "allow-special-filenames": ("allow_special_filenames", "names"),
    "skip-path-regex": ("skip_path_regex", "regex"),
    "allow-duplicate-basenames": ("allow_duplicate_basenames", "lower-names"),
    "hash-globs": ("hash_globs", "paths"),
    "max-hash-bytes": ("max_hash_bytes", "int"),
}


def _compile(key, value):
    try:
        return re.compile(value)
    except re.error as e:
        raise PolicyError(f"{key}: invalid regex {value!r}: {e}") from e


def _coerce(key, kind, value):
    if kind == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise PolicyError(f"{key}: expected an integer, got {value!r}")
        if value <= 0:
            raise PolicyError(f"{key}: must be positive, got {value}")
        return value
    if kind == "regex":
        if not isinstance(value, str):
            raise PolicyError(f"{key}: expected a string, got {value!r}")
        return _compile(key, value)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise PolicyError(f"{key}: expected a list of strings, got {value!r}")
    if kind == "paths":
        return tuple(value)
    if kind == "names":
        return frozenset(value)
    return frozenset(v.lower() for v in value)


def policy_from_mapping(table, base=None, source="config"):
    """Layer a TOML-style table over base (defaults when None)."""
    if not isinstance(table, dict):
        raise PolicyError(f"{source}: expected a table, got {type(table).__name__}")
    changes = {}
    for raw_key, value in table.items():
        key = raw_key.replace("_", "-")
        if key not in _KEYS:
            known = ", ".join(sorted(_KEYS))
            raise PolicyError(f"{source}: unknown key {raw_key!r} (known: {known})")
        attr, kind = _KEYS[key]
        changes[attr] = _coerce(key, kind, value)
    return replace(base or PolicyConfig(), **changes)


def _read_toml(path):
    # Imported here so an old interpreter gets a clean exit 2 from main(),
    # not an ImportError at package import.
    import tomllib

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise PolicyError(f"{path}: invalid TOML: {e}") from e
    except OSError as e:
        raise PolicyError(f"{path}: cannot read: {e}") from e


def _tool_table(data, source):
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        raise PolicyError(f"{source}: [tool] must be a table")
    return tool


def load_policy(root, config_path=None, overrides=None):
    """Defaults, then <root>/pyproject.toml, then --config, then CLI flags."""
    policy = PolicyConfig()

    pyproject = os.path.join(root, "pyproject.toml")
    if os.path.isfile(pyproject):
        table = _tool_table(_read_toml(pyproject), pyproject).get("structure_lint")
        if table is not None:
            policy = policy_from_mapping(table, policy, source=pyproject)

    if config_path:
        data = _read_toml(config_path)
        # Accept a copy of the pyproject table or bare top-level keys.
        table = _tool_table(data, config_path).get("structure_lint", {}) if "tool" in data else data
        policy = policy_from_mapping(table, policy, source=config_path)

    if overrides:
        policy = policy_from_mapping(overrides, policy, source="command line")
    return policy
