import logging

from .data_mem import DataMem
from .errors import NotAssociated, InternalInconsistency
from .user_registry import UserRegistry

logger = logging.getLogger(__name__)


class Reconciler:
    """Removes references to a deleted group from every user's group list."""

    def __init__(self, data: DataMem, users: UserRegistry):
        self.data = data
        self.users = users

    def reconcile(self, deleted_group_id: int) -> int:
        """Strip the group id from all users. Returns how many users referenced it."""
        detached = 0
        with self.data.lock:
            for username in list(self.data.users):
                try:
                    self.users.detach_group(username, deleted_group_id)
                except NotAssociated:
                    continue
                detached += 1

            if __debug__:
                for user in self.data.users.values():
                    if deleted_group_id in user.groups:
                        raise InternalInconsistency(
                            f"User '{user.username}' still references group {deleted_group_id}"
                        )

        logger.info(f"Reconciled group {deleted_group_id}: detached from {detached} user(s)")
        return detached
