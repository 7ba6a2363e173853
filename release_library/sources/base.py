"""Release source protocol.

A release source returns the complete list of releases for one repository,
all pages concatenated, or raises SourceUnavailable. It never returns a
partial list.
"""

from typing import Any
from typing import Protocol

ReleaseRecord = dict[str, Any]


class ReleaseSource(Protocol):
    """Capability to fetch every release of a named repository."""

    async def fetch_all(self, repository_key: str) -> list[ReleaseRecord]:
        """Fetch all releases of a repository.

        Raises:
            SourceUnavailable: On network, API or rate-limit failure
        """
        ...
