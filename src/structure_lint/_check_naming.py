"""Every directory and file name follows one grammar: lowercase_underscore.

Two layers. The common rules (spaces, unicode, leading hyphen, case,
length) apply to every name that isn't explicitly allowlisted. The
grammar (segment and extension patterns) applies on top, except to
dot-names like .github or .editorconfig, which keep their conventional
spelling.

Order matters. Special filenames are checked first because several of
them (Dockerfile, LICENSE) would fail the uppercase rule.
"""

from structure_lint._classifier import DIR
from structure_lint._violation import BAD_NAME, Violation


def _bad(rule, rel, message):
    return Violation(BAD_NAME, rule, (rel,), message)


def _is_printable_ascii(seg):
    return all(" " <= c <= "~" for c in seg)


def check_common_rules(seg, kind, rel, policy):
    """Only the first broken common rule is reported. One name, one complaint."""
    if " " in seg:
        return [_bad("space", rel, f"Name contains spaces ({kind}): {rel}")]
    if not _is_printable_ascii(seg):
        return [_bad("non-ascii", rel, f"Name contains non-ASCII characters ({kind}): {rel}")]
    if seg.startswith("-"):
        return [_bad("leading-hyphen", rel, f"Name starts with '-' ({kind}): {rel}")]
    if seg != seg.lower():
        return [_bad("uppercase", rel, f"Name contains uppercase letters ({kind}): {rel}")]
    if len(seg) > policy.max_segment_len:
        return [_bad(
            "too-long", rel,
            f"Name too long ({len(seg)} > {policy.max_segment_len}) ({kind}): {rel}",
        )]
    return []


def check_dir_name(seg, rel, policy):
    found = check_common_rules(seg, "dir", rel, policy)
    if seg.startswith("."):
        return found
    if not policy.segment_regex.search(seg):
        found.append(_bad("dir-name", rel, f"Bad directory name (use lowercase_underscore): {rel}"))
    return found


def check_file_name(seg, rel, policy):
    if seg in policy.allow_special_filenames:
        return []

    found = check_common_rules(seg, "file", rel, policy)
    if seg.startswith("."):
        return found

    # Split on the last dot only: archive.tar.gz -> archive.tar + gz
    base, dot, ext = seg.rpartition(".")
    if not dot:
        if not policy.segment_regex.search(seg):
            found.append(_bad("file-name", rel, f"Bad filename (use lowercase_underscore): {rel}"))
        return found

    if not policy.segment_regex.search(base):
        found.append(_bad("file-base", rel, f"Bad filename base (use lowercase_underscore): {rel}"))
    if not policy.ext_regex.search(ext):
        found.append(_bad("file-extension", rel, f"Bad file extension (lowercase/digits only): {rel}"))
    return found


def check_entry_name(entry, policy):
    if entry.kind == DIR:
        return check_dir_name(entry.name, entry.rel, policy)
    return check_file_name(entry.name, entry.rel, policy)


def check_naming(entries, policy):
    violations = []
    for entry in entries:
        violations.extend(check_entry_name(entry, policy))
    return violations
