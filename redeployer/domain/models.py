"""Typed domain models for Okteto namespaces and applications.

Both models are read-only snapshots fetched from the Okteto API once per run.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

# Applications the API reports without a last update time sort before any cutoff.
UNKNOWN_LAST_UPDATED = datetime.min.replace(tzinfo=timezone.utc)


class NamespaceStatus(str, Enum):
    """Lifecycle status values reported for Okteto namespaces."""

    ACTIVE = "Active"
    DESTROY_ALL_FAILED = "DestroyAllFailed"
    DESTROYING_ALL = "DestroyingAll"
    DELETING = "Deleting"
    INACTIVE = "Inactive"
    SLEEPING = "Sleeping"
    DELETE_FAILED = "DeleteFailed"


@dataclass(frozen=True)
class Namespace:
    """Okteto namespace snapshot.

    Attributes:
        name: Namespace name.
        status: Lifecycle status. Values outside `NamespaceStatus` are kept verbatim.
    """

    name: str
    status: str

    def namespace_is_sleeping(self) -> bool:
        """Return whether the namespace was sleeping when it was listed.

        Returns:
            bool: True when status is `Sleeping`.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self.status == NamespaceStatus.SLEEPING


@dataclass(frozen=True)
class Application:
    """Application deployed within an Okteto namespace.

    Attributes:
        name: Application name, unique within its namespace.
        repository: Source repository URL, when the application was deployed from one.
        branch: Source branch, when known.
        last_updated: Timezone-aware UTC timestamp of the last deployment.
    """

    name: str
    repository: str | None
    branch: str | None
    last_updated: datetime

    def application_has_repository(self) -> bool:
        """Return whether the application can be redeployed from source.

        Returns:
            bool: True when a non-blank repository is configured.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return bool(self.repository and self.repository.strip())
