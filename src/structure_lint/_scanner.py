"""Walk the tree once, run every check, merge what they found.

The scanner sees everything but fixes nothing. Each check is a plain
function that returns its own violations; nothing writes to shared
state. A broken rule never stops the walk: the run either visits
every eligible path or doesn't start at all.
"""

from concurrent.futures import ThreadPoolExecutor

from structure_lint._classifier import iter_entries
from structure_lint._check_duplicates import check_duplicate_basenames, check_duplicate_content
from structure_lint._check_existence import check_existence
from structure_lint._check_naming import check_naming
from structure_lint._violation import sort_violations


def scan(root, policy, jobs=1):
    """Return every violation under root, sorted for the report.

    The traversal is materialised once and shared read-only by naming and
    both duplicate passes. With jobs > 1 the four checks run side by side;
    the result is sorted either way, so output doesn't depend on jobs.
    """
    entries = tuple(iter_entries(root, policy))

    checks = [
        lambda: check_existence(root, policy),
        lambda: check_naming(entries, policy),
        lambda: check_duplicate_basenames(entries, policy),
        lambda: check_duplicate_content(root, entries, policy),
    ]

    if jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            results = list(ex.map(lambda check: check(), checks))
    else:
        results = [check() for check in checks]

    violations = []
    for found in results:
        violations.extend(found)
    return sort_violations(violations)
