from pathlib import Path

import pytest

from structure_lint import PolicyConfig


@pytest.fixture
def policy():
    return PolicyConfig()


@pytest.fixture
def make_tree(tmp_path):
    """Build a tree from {rel: content}; content None makes a directory."""

    def _make(spec, root: Path = tmp_path) -> Path:
        for rel, content in spec.items():
            path = root / rel
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def clean_repo(make_tree):
    """Smallest tree that passes the default policy."""
    return make_tree({
        "pyproject.toml": '[project]\nname = "demo"\n',
        ".github/workflows/ci.yml": "on: push\n",
        "src/demo/core.py": "VALUE = 1\n",
        "README.md": "# demo\n",
    })
