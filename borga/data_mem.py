import logging
import threading
from typing import Dict

from .models import User, Group

logger = logging.getLogger(__name__)


class DataMem:
    """
    In-memory holder for every Borga collection:
    - users: username -> User
    - groups: group id -> Group
    - tokens: token -> username

    One re-entrant lock guards all three, since invariants span collections
    (a group's existence and the owner's reference list).
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.users: Dict[str, User] = {}
        self.groups: Dict[int, Group] = {}
        self.tokens: Dict[str, str] = {}
        self._last_group_id = 0

    def next_group_id(self) -> int:
        """Allocate a group id. Ids are never reused, even after a clear."""
        with self.lock:
            self._last_group_id += 1
            return self._last_group_id

    def clear_users(self):
        with self.lock:
            self.users.clear()
        logger.info("Cleared users")

    def clear_groups(self):
        with self.lock:
            self.groups.clear()
        logger.info("Cleared groups")

    def clear_tokens(self):
        with self.lock:
            self.tokens.clear()
        logger.info("Cleared tokens")
