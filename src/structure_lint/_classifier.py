"""Walk the tree once and say what every path is.

Skipped paths never leave this module; downstream checks don't know
they exist. Skipped directories are pruned, so their contents are
never visited either.
"""

import os
import stat
import sys
from typing import NamedTuple

DIR = "dir"
FILE = "file"


class PathEntry(NamedTuple):
    rel: str
    kind: str
    name: str
    is_link: bool = False
    # Plain file on disk: not a symlink, FIFO, socket or device node.
    is_regular: bool = False


def _warn_unreadable(err):
    print(f"WARNING: cannot read directory: {err.filename}: {err.strerror}", file=sys.stderr)


def _is_regular(full):
    try:
        return stat.S_ISREG(os.lstat(full).st_mode)
    except OSError:
        return False


def _relpath(full, root):
    return os.path.relpath(full, root).replace(os.sep, "/")


def iter_entries(root, policy):
    """Yield a PathEntry for everything below root, root itself excluded.

    Siblings come out sorted so two runs over the same tree agree.
    Symlinks are reported but not followed. Only plain files are marked
    is_regular; everything else that lives in filenames (FIFOs, sockets,
    devices) is still name-checked but never opened.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_warn_unreadable):
        dirnames.sort()
        kept = []
        for d in dirnames:
            full = os.path.join(dirpath, d)
            rel = _relpath(full, root)
            if policy.is_skipped(rel, is_dir=True):
                continue
            kept.append(d)
            yield PathEntry(rel, DIR, d, os.path.islink(full))
        dirnames[:] = kept

        for fname in sorted(filenames):
            full = os.path.join(dirpath, fname)
            rel = _relpath(full, root)
            if policy.is_skipped(rel):
                continue
            yield PathEntry(rel, FILE, fname, os.path.islink(full), _is_regular(full))
