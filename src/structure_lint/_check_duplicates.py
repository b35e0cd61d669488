"""Accidental copies, two ways: same filename, or same bytes.

Same filename in two places usually means a module got copied instead
of imported. Same bytes under different names is the same mistake with
a rename on top. Both indexes read only regular files. Symlinks point
at something that is already being counted, and opening a FIFO would
block the run.
"""

import fnmatch
import hashlib
import os
import sys

from structure_lint._classifier import FILE
from structure_lint._violation import DUPLICATE_BASENAME, DUPLICATE_CONTENT, Violation

_CHUNK = 64 * 1024


def _regular_files(entries):
    return [e for e in entries if e.kind == FILE and e.is_regular]


def index_basenames(entries, policy):
    """lowercase basename -> [rel, ...], allowlisted names left out."""
    index = {}
    for entry in _regular_files(entries):
        key = entry.name.lower()
        if key in policy.allow_duplicate_basenames:
            continue
        index.setdefault(key, []).append(entry.rel)
    return index


def check_duplicate_basenames(entries, policy):
    violations = []
    for key, paths in sorted(index_basenames(entries, policy).items()):
        if len(paths) > 1:
            violations.append(Violation(
                DUPLICATE_BASENAME, "duplicate-basename", tuple(sorted(paths)),
                f"Duplicate filename detected: {key} appears in multiple locations:",
            ))
    return violations


def sha256_file(path):
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK), b""):
            h.update(chunk)
    return h.hexdigest()


def is_hashable(name, policy):
    return any(fnmatch.fnmatchcase(name, pat) for pat in policy.hash_globs)


def index_content(root, entries, policy):
    """sha256 -> [rel, ...] for glob-matched files within the size cap.

    Oversized files are left out silently. Too big to be a copy-paste
    accident worth hashing, not a violation in itself.
    """
    index = {}
    for entry in _regular_files(entries):
        if not is_hashable(entry.name, policy):
            continue
        full = os.path.join(root, entry.rel)
        try:
            if os.path.getsize(full) > policy.max_hash_bytes:
                continue
            digest = sha256_file(full)
        except OSError as e:
            print(f"WARNING: cannot hash {entry.rel}: {e.strerror}", file=sys.stderr)
            continue
        index.setdefault(digest, []).append(entry.rel)
    return index


def check_duplicate_content(root, entries, policy):
    violations = []
    for digest, paths in sorted(index_content(root, entries, policy).items()):
        if len(paths) > 1:
            violations.append(Violation(
                DUPLICATE_CONTENT, "duplicate-content", tuple(sorted(paths)),
                "Duplicate file content detected (same sha256):",
            ))
    return violations
