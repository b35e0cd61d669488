"""Some paths must be there, some must never be. Literal paths, no globs."""

import os

from structure_lint._violation import FORBIDDEN_PRESENT, MISSING_REQUIRED, Violation


def check_existence(root, policy):
    violations = []
    for p in policy.required_paths:
        if not os.path.exists(os.path.join(root, p)):
            violations.append(Violation(
                MISSING_REQUIRED, "required-path", (p,), f"Missing required path: {p}",
            ))
    for p in policy.forbidden_paths:
        if os.path.exists(os.path.join(root, p)):
            violations.append(Violation(
                FORBIDDEN_PRESENT, "forbidden-path", (p,),
                f"Forbidden path exists (delete it or add to excludes): {p}",
            ))
    return violations
