"""How the linter communicates: the policy if asked, then the verdict."""

import json
import sys

from structure_lint._laws import LAWS


def print_policy(policy):
    """State the law before enforcing it. No secret rules."""
    print("Laws:")
    for i, law in enumerate(LAWS, 1):
        print(f"  {i}. {law}")
    # Everything below can be overridden, so print the active values.
    print("Policy:")
    for label, value in policy.describe():
        print(f"  {label:<20}  {value}")
    print()


def print_report(violations, fmt="text"):
    """Print every violation, then the verdict. Returns the exit status.

    Violations go to stderr as ERROR lines; multi-path ones list each
    member path on its own line under the header.
    """
    status = 1 if violations else 0

    if fmt == "json":
        payload = {"ok": not violations, "violations": [v.as_dict() for v in violations]}
        print(json.dumps(payload, indent=2))
        return status

    for v in violations:
        print(f"ERROR: {v.message}", file=sys.stderr)
        if len(v.paths) > 1:
            for path in v.paths:
                print(f"  {path}", file=sys.stderr)

    if violations:
        print(f"Structure lint failed: {len(violations)} violation(s).", file=sys.stderr)
    else:
        print("Structure lint passed.")
    return status
