import copy
from typing import Any, List

from .data_mem import DataMem
from .errors import UserNotFound, GroupNotFound, AlreadyAssociated, NotAssociated
from .models import User, Group, normalize_group_id


class UserRegistry:
    """
    Tracks users and the group ids each user is associated with.
    Entries in a user's list are references; the user does not own the groups.
    """

    def __init__(self, data: DataMem):
        self.data = data

    def user_exists(self, username: str) -> bool:
        return username in self.data.users

    def list_users(self) -> List[str]:
        with self.data.lock:
            return list(self.data.users)

    def _find_user(self, username: str) -> User:
        user = self.data.users.get(username)
        if user is None:
            raise UserNotFound(f"User '{username}' does not exist")
        return user

    def get_user(self, username: str) -> User:
        """Return a copy of the user, safe to read after the lock is released."""
        with self.data.lock:
            return copy.deepcopy(self._find_user(username))

    def attach_group(self, username: str, group_id: Any) -> int:
        """Associate a group with a user. Returns the canonical group id."""
        group_id = normalize_group_id(group_id)
        with self.data.lock:
            user = self._find_user(username)
            if group_id not in self.data.groups:
                raise GroupNotFound(f"Group {group_id} does not exist")
            if group_id in user.groups:
                raise AlreadyAssociated(
                    f"User '{username}' is already associated with group {group_id}"
                )
            user.groups.append(group_id)
            return group_id

    def detach_group(self, username: str, group_id: Any) -> bool:
        group_id = normalize_group_id(group_id)
        with self.data.lock:
            user = self._find_user(username)
            if group_id not in user.groups:
                raise NotAssociated(
                    f"User '{username}' is not associated with group {group_id}"
                )
            user.groups.remove(group_id)
            return True

    def list_user_groups(self, username: str) -> List[Group]:
        """
        Resolve a user's group ids to groups.
        Ids that no longer resolve are skipped, so a stale reference is never
        returned even if reconciliation has not reached this user yet.
        """
        with self.data.lock:
            user = self._find_user(username)
            return [
                copy.deepcopy(self.data.groups[group_id])
                for group_id in user.groups
                if group_id in self.data.groups
            ]
