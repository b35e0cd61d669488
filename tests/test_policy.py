from __future__ import annotations

import dataclasses

import pytest

from structure_lint import PolicyConfig, PolicyError, load_policy
from structure_lint._policy import policy_from_mapping


def test_defaults_match_built_in_laws(policy) -> None:
    assert policy.required_paths == ("pyproject.toml", ".github/workflows")
    assert "node_modules" in policy.forbidden_paths
    assert policy.max_segment_len == 32
    assert policy.max_hash_bytes == 2 * 1024 * 1024
    assert policy.segment_regex.pattern == r"^[a-z0-9]+(_[a-z0-9]+)*$"
    assert "Dockerfile" in policy.allow_special_filenames
    assert "__init__.py" in policy.allow_duplicate_basenames


def test_policy_is_frozen(policy) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        policy.max_segment_len = 10  # type: ignore[misc]


def test_skip_pattern_uses_trailing_slash_for_directories(policy) -> None:
    assert policy.is_skipped(".git", is_dir=True)
    assert not policy.is_skipped(".git")
    assert policy.is_skipped("node_modules/left_pad/index.js")
    assert not policy.is_skipped("src/dist_utils.py")


def test_mapping_overrides_defaults() -> None:
    policy = policy_from_mapping({
        "max-segment-len": 12,
        "required_paths": ["setup.cfg"],
        "allow-duplicate-basenames": ["ConfTest.py"],
    })
    assert policy.max_segment_len == 12
    assert policy.required_paths == ("setup.cfg",)
    assert policy.allow_duplicate_basenames == frozenset({"conftest.py"})
    # untouched fields keep their defaults
    assert policy.hash_globs == PolicyConfig().hash_globs


@pytest.mark.parametrize(
    "table",
    [
        {"segment-regex": "("},
        {"skip-path-regex": "[unclosed"},
        {"max-segment-len": 0},
        {"max-hash-bytes": -1},
        {"max-hash-bytes": True},
        {"max-segment-len": "32"},
        {"hash-globs": "*.py"},
        {"forbidden-paths": ["dist", 3]},
        {"no-such-rule": 1},
    ],
)
def test_invalid_policy_is_rejected(table) -> None:
    with pytest.raises(PolicyError):
        policy_from_mapping(table)


def test_non_positive_limit_rejected_at_construction() -> None:
    with pytest.raises(PolicyError):
        PolicyConfig(max_segment_len=0)


def test_load_policy_reads_pyproject_table(make_tree) -> None:
    root = make_tree({
        "pyproject.toml": '[tool.structure_lint]\nmax-segment-len = 20\nhash-globs = ["*.py"]\n',
    })
    policy = load_policy(str(root))
    assert policy.max_segment_len == 20
    assert policy.hash_globs == ("*.py",)


def test_load_policy_without_table_uses_defaults(make_tree) -> None:
    root = make_tree({"pyproject.toml": '[project]\nname = "demo"\n'})
    assert load_policy(str(root)) == PolicyConfig()


def test_config_file_then_command_line_take_precedence(make_tree, tmp_path) -> None:
    root = make_tree({
        "repo/pyproject.toml": "[tool.structure_lint]\nmax-segment-len = 20\nmax-hash-bytes = 100\n",
        "policy.toml": "max-segment-len = 24\nmax-hash-bytes = 200\n",
    })
    policy = load_policy(
        str(root / "repo"),
        config_path=str(tmp_path / "policy.toml"),
        overrides={"max-hash-bytes": 300},
    )
    assert policy.max_segment_len == 24
    assert policy.max_hash_bytes == 300


def test_config_file_accepts_pyproject_shaped_table(make_tree, tmp_path) -> None:
    make_tree({"policy.toml": '[tool.structure_lint]\nforbidden-paths = ["out"]\n'})
    policy = load_policy(str(tmp_path), config_path=str(tmp_path / "policy.toml"))
    assert policy.forbidden_paths == ("out",)


def test_malformed_toml_is_a_policy_error(make_tree) -> None:
    root = make_tree({"pyproject.toml": "[tool.structure_lint\n"})
    with pytest.raises(PolicyError):
        load_policy(str(root))


def test_missing_config_file_is_a_policy_error(tmp_path) -> None:
    with pytest.raises(PolicyError):
        load_policy(str(tmp_path), config_path=str(tmp_path / "nope.toml"))


def test_non_table_tool_in_pyproject_is_a_policy_error(make_tree) -> None:
    root = make_tree({"pyproject.toml": 'tool = "x"\n'})
    with pytest.raises(PolicyError, match=r"\[tool\] must be a table"):
        load_policy(str(root))


def test_non_table_tool_in_config_file_is_a_policy_error(make_tree, tmp_path) -> None:
    make_tree({"policy.toml": "tool = 3\n"})
    with pytest.raises(PolicyError, match=r"\[tool\] must be a table"):
        load_policy(str(tmp_path / "missing_root"), config_path=str(tmp_path / "policy.toml"))


def test_string_regex_is_compiled_at_construction() -> None:
    policy = PolicyConfig(segment_regex="^a$")
    assert policy.segment_regex.search("a")
    assert not policy.segment_regex.search("b")


@pytest.mark.parametrize(
    "kwargs",
    [{"segment_regex": 3}, {"ext_regex": None}, {"skip_path_regex": "("}],
)
def test_bad_regex_rejected_at_construction(kwargs) -> None:
    with pytest.raises(PolicyError):
        PolicyConfig(**kwargs)
