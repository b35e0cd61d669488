"""Structure linter: hold a source tree to one naming and layout policy.

Runs as a CI gate before anything else looks at the code. It walks every
file and directory under the root once and reports everything it finds
in one go, so a contributor fixes the whole list instead of playing
whack-a-mole with one error per push.

Checks:
  - naming: lowercase_underscore names, ASCII only, no spaces, no
    leading hyphens, bounded length, lowercase extensions
  - existence: required paths present, forbidden paths absent
  - duplicate basenames: the same filename in two places
  - duplicate content: byte-identical files (sha256)

Usage:
    python3 -m structure_lint                     # lint $GITHUB_WORKSPACE or cwd
    python3 -m structure_lint path/to/repo        # lint another tree
    python3 -m structure_lint . --show-policy     # print the active rules first
"""

import argparse
import os
import sys

from structure_lint._policy import PolicyConfig, PolicyError, load_policy
from structure_lint._report import print_policy, print_report
from structure_lint._scanner import scan
from structure_lint._violation import Violation

__version__ = "0.1.0"
__all__ = [
    "main",
    "scan",
    "load_policy",
    "print_report",
    "print_policy",
    "PolicyConfig",
    "PolicyError",
    "Violation",
]

MIN_PYTHON = (3, 11)


def _default_root():
    return os.environ.get("GITHUB_WORKSPACE") or os.getcwd()


def _fatal(message):
    print(f"ERROR: {message}", file=sys.stderr)
    return 2


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="structure-lint",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
structure-lint: naming and layout gate for a source tree.

Walks every file and directory under PATH (default: $GITHUB_WORKSPACE,
else the current directory), skips paths matching the skip pattern,
and reports every violation it finds before deciding pass or fail.

Naming rules (every file and directory):
  - no spaces, ASCII only, no leading '-', no uppercase
  - at most max-segment-len characters
  - directories and file bases match the segment pattern
    (default: lowercase words joined by single underscores)
  - file extensions match the extension pattern (default: [a-z0-9]+)
  Dot-names (.github, .editorconfig) skip the patterns but not the
  rules above. Special filenames (Dockerfile, LICENSE, ...) skip
  everything.

Tree rules:
  - required paths must exist, forbidden paths must not
  - a basename may appear only once in the tree (allowlist aside,
    e.g. __init__.py), compared case-insensitively
  - files matching the hash globs and at most max-hash-bytes large
    must not share identical content

Policy:
  Defaults are built in. Override them under [tool.structure_lint]
  in PATH/pyproject.toml, or in a TOML file passed with --config.
  --show-policy prints what is actually in force.

Exit status: 0 clean, 1 violations, 2 bad policy or environment.""",
    )
    parser.add_argument("path", nargs="?", default=None, help="Root directory to lint")
    parser.add_argument("--config", metavar="FILE", help="TOML file with policy overrides")
    parser.add_argument("--max-segment-len", type=int, help="Override the per-segment length limit")
    parser.add_argument("--max-hash-bytes", type=int, help="Override the size cap for content hashing")
    parser.add_argument("--jobs", type=int, default=1, help="Run the checks on N threads (default: 1)")
    parser.add_argument("--format", choices=("text", "json"), default="text", help="Report format")
    parser.add_argument("--show-policy", action="store_true", help="Print the active policy before linting")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    if sys.version_info < MIN_PYTHON:
        wanted = ".".join(map(str, MIN_PYTHON))
        return _fatal(f"structure-lint needs Python {wanted}+, running {sys.version.split()[0]}")

    root = os.path.abspath(args.path or _default_root())
    if not os.path.isdir(root):
        return _fatal(f"not a directory: {root}")
    if args.jobs < 1:
        return _fatal(f"--jobs must be at least 1, got {args.jobs}")

    overrides = {}
    if args.max_segment_len is not None:
        overrides["max-segment-len"] = args.max_segment_len
    if args.max_hash_bytes is not None:
        overrides["max-hash-bytes"] = args.max_hash_bytes

    try:
        policy = load_policy(root, args.config, overrides)
    except PolicyError as e:
        return _fatal(f"invalid policy: {e}")

    if args.show_policy and args.format == "text":
        print_policy(policy)

    violations = scan(root, policy, jobs=args.jobs)
    return print_report(violations, fmt=args.format)
