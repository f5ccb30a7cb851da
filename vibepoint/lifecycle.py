"""
Data lifecycle operations: full export and full deletion of a user's data.

Export is read-only. Deletion is destructive and irreversible, guarded by an
exact confirmation phrase checked before the store is touched.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from .config import DELETE_CONFIRMATION_PHRASE, EXPORT_DATA_TYPE, EXPORT_VERSION
from .errors import InvalidConfirmation, StorageFailure
from .models import DeleteResult, ExportBundle, ExportedEntry, User
from .store import EntryStore

logger = logging.getLogger(__name__)

DELETE_SUCCESS_MESSAGE = "All mood data has been permanently deleted"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DataLifecycleService:
    """Export and delete a user's mood history against an EntryStore."""

    def __init__(
        self, store: EntryStore, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        self._store = store
        self._clock = clock

    async def export_all(self, user: User) -> ExportBundle:
        """
        Build the export bundle for ``user``.

        The store is read once; the bundle reflects that snapshot. A user with
        no entries gets an empty bundle.

        Raises:
            StorageFailure: The store could not be read
        """
        try:
            entries = await self._store.list_entries(user.id)
        except StorageFailure:
            logger.error("Export failed for user %s: store unavailable", user.id)
            raise

        bundle = ExportBundle(
            exported_at=self._clock(),
            user_id=user.id,
            user_email=user.email,
            data_type=EXPORT_DATA_TYPE,
            version=EXPORT_VERSION,
            total_entries=len(entries),
            entries=[ExportedEntry.from_entry(entry) for entry in entries],
        )
        logger.info("Exported %d entries for user %s", bundle.total_entries, user.id)
        return bundle

    async def delete_all(self, user: User, confirmation: str | None) -> DeleteResult:
        """
        Permanently delete every entry owned by ``user``.

        Args:
            user: The owner of the data
            confirmation: Must equal DELETE_CONFIRMATION_PHRASE exactly

        Raises:
            InvalidConfirmation: The phrase did not match; nothing was deleted
            StorageFailure: The store rejected the deletion; success is not
                reported
        """
        if confirmation != DELETE_CONFIRMATION_PHRASE:
            raise InvalidConfirmation(
                f'Invalid confirmation. Please type "{DELETE_CONFIRMATION_PHRASE}" exactly.'
            )

        try:
            removed = await self._store.delete_entries(user.id)
        except StorageFailure:
            logger.error("Deletion failed for user %s", user.id)
            raise

        logger.info("Deleted %d entries for user %s", removed, user.id)
        return DeleteResult(
            success=True,
            message=DELETE_SUCCESS_MESSAGE,
            deleted_at=self._clock(),
        )
