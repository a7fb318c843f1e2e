"""Key/value storage backed by the ``storage_items`` table."""

from typing import Any, Optional

from src.database.models import StorageItem, db
from utils.logger import logger

USERS_STORAGE_KEY = "fairgrade_users"
CURRENT_USER_KEY = "current_user"


class LocalStorage:
    """Store JSON documents under string keys.

    Values are replaced wholesale on every write, there is no merging.
    """

    def __init__(self, session=None):
        self.session = session or db.session

    def get_item(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key`` or None."""
        item = self.session.get(StorageItem, key)
        return item.value if item is not None else None

    def set_item(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        item = self.session.get(StorageItem, key)
        if item is None:
            item = StorageItem(key=key, value=value)
            self.session.add(item)
        else:
            item.value = value
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.error(f"Failed to write storage key {key}", exc_info=True)
            raise
