"""Name reconciliation between the server and the local repository."""

from typing import Iterable, List


def reconcile(remote_names: Iterable[str], local_names: Iterable[str]) -> List[str]:
    """Return the sorted, de-duplicated union of both name collections.

    This is the canonical iteration order of a checklist run.
    """
    return sorted(set(remote_names) | set(local_names))
