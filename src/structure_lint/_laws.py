"""What the structure linter watches for: the default policy.

Adopting repositories override these in pyproject.toml under
[tool.structure_lint] rather than editing this file.
"""

# Must exist relative to the root.
REQUIRED_PATHS = (
    "pyproject.toml",
    ".github/workflows",
)

# Must not exist relative to the root. Literal paths, not globs.
FORBIDDEN_PATHS = (
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".venv",
    "venv",
    "dist",
    "build",
    "node_modules",
)

# "Short and descriptive", enforced per path segment.
MAX_SEGMENT_LEN = 32

# lowercase letters and digits, single underscores between words,
# no leading, trailing or doubled underscore.
SEGMENT_REGEX = r"^[a-z0-9]+(_[a-z0-9]+)*$"

EXT_REGEX = r"^[a-z0-9]+$"

# Exact names that skip every naming rule. Keep this list short.
ALLOW_SPECIAL_FILENAMES = (
    "Dockerfile",
    "Makefile",
    "LICENSE",
    "README.md",
    ".gitignore",
    ".gitattributes",
)

# Matched against the path relative to root; directories get a trailing "/".
SKIP_PATH_REGEX = (
    r"^(\.shared-repo/|\.git/|\.venv/|venv/|node_modules/|dist/|build/"
    r"|site-packages/|\.ruff_cache/|\.mypy_cache/|\.pytest_cache/)"
)

# Compared case-insensitively.
ALLOW_DUPLICATE_BASENAMES = (
    "__init__.py",
    "dockerfile",
    "readme.md",
    "license",
)

HASH_GLOBS = (
    "*.py",
    "*.sh",
    "*.yml",
    "*.yaml",
    "*.md",
    "*.toml",
    "Dockerfile",
)

MAX_HASH_BYTES = 2 * 1024 * 1024

# Printed with --show-policy so the subject knows what it is measured
# against. No secret rules.
LAWS = [
    "Names are lowercase ASCII, words separated by single underscores",
    "No spaces, no unicode, no leading hyphens",
    "File extensions are lowercase letters and digits",
    "Required paths exist, forbidden paths do not",
    "One file per basename across the tree (allowlist aside)",
    "No two hashed files share the same bytes",
]
