"""What a broken rule looks like once it has been found."""

from typing import NamedTuple

MISSING_REQUIRED = "missing-required"
FORBIDDEN_PRESENT = "forbidden-present"
BAD_NAME = "bad-name"
DUPLICATE_BASENAME = "duplicate-basename"
DUPLICATE_CONTENT = "duplicate-content"

# Report order. Existence problems first, they usually explain the rest.
KINDS = (
    MISSING_REQUIRED,
    FORBIDDEN_PRESENT,
    BAD_NAME,
    DUPLICATE_BASENAME,
    DUPLICATE_CONTENT,
)


class Violation(NamedTuple):
    kind: str
    rule: str
    paths: tuple
    message: str

    def sort_key(self):
        # Stable sort: rules broken by the same path keep the order they were checked in.
        return (KINDS.index(self.kind), self.paths)

    def as_dict(self):
        return {
            "kind": self.kind,
            "rule": self.rule,
            "paths": list(self.paths),
            "message": self.message,
        }


def sort_violations(violations):
    """Stable, collection-order-independent ordering for the final report."""
    return sorted(violations, key=Violation.sort_key)
