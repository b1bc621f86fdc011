import copy
import logging
from typing import Any, List, Union

from .data_mem import DataMem
from .errors import (
    UserNotFound, GroupNotFound, NotAuthorized, InvalidName, InvalidDescription,
    InvalidGame, GameAlreadyInGroup, GameNotInGroup,
)
from .models import Group, Game, normalize_group_id
from .reconciler import Reconciler
from .user_registry import UserRegistry

logger = logging.getLogger(__name__)


def _is_text(value) -> bool:
    return isinstance(value, str) and value != ''


class GroupStore:
    """
    Owns groups and the games embedded in them:
    - Create/rename/redescribe/delete groups
    - Add/remove games inside a group
    - Read projections (details, game names)

    Every mutation requires the acting user to be the group owner. Existence
    is checked before ownership, so a missing group is always GroupNotFound.
    """

    def __init__(self, data: DataMem, users: UserRegistry, reconciler: Reconciler):
        self.data = data
        self.users = users
        self.reconciler = reconciler

    def group_exists(self, group_id: Any) -> bool:
        return normalize_group_id(group_id) in self.data.groups

    def _find_group(self, group_id: Any) -> Group:
        group_id = normalize_group_id(group_id)
        group = self.data.groups.get(group_id)
        if group is None:
            raise GroupNotFound(f"Group {group_id} does not exist")
        return group

    def _find_owned_group(self, username: str, group_id: Any) -> Group:
        group = self._find_group(group_id)
        if group.owner != username:
            raise NotAuthorized(f"User '{username}' does not own group {group.id}")
        return group

    def get_group(self, group_id: Any) -> Group:
        """Return a copy of the group, safe to read after the lock is released."""
        with self.data.lock:
            return copy.deepcopy(self._find_group(group_id))

    def get_owned_group(self, username: str, group_id: Any) -> Group:
        with self.data.lock:
            return copy.deepcopy(self._find_owned_group(username, group_id))

    def create_group(self, owner: str, name: str, description: str) -> int:
        """
        Create a group owned by `owner` and attach it to the owner's list.
        The insert and the attach happen under the same lock, so no reader
        sees the group without its owner-side reference.
        """
        with self.data.lock:
            if not self.users.user_exists(owner):
                raise UserNotFound(f"User '{owner}' does not exist")
            if not _is_text(name):
                raise InvalidName()
            if not _is_text(description):
                raise InvalidDescription()

            group_id = self.data.next_group_id()
            self.data.groups[group_id] = Group(
                id=group_id,
                owner=owner,
                name=name,
                description=description,
            )
            self.users.attach_group(owner, group_id)

        logger.info(f"Created group {group_id} '{name}' for {owner}")
        return group_id

    def get_group_details(self, group_id: Any) -> dict:
        with self.data.lock:
            return self._find_group(group_id).details()

    def list_groups(self) -> List[dict]:
        with self.data.lock:
            return [group.details() for group in self.data.groups.values()]

    def rename_group(self, username: str, group_id: Any, new_name: str) -> str:
        with self.data.lock:
            group = self._find_owned_group(username, group_id)
            if not _is_text(new_name):
                raise InvalidName()
            group.name = new_name
            return new_name

    def redescribe_group(self, username: str, group_id: Any, new_description: str) -> str:
        with self.data.lock:
            group = self._find_owned_group(username, group_id)
            if not _is_text(new_description):
                raise InvalidDescription()
            group.description = new_description
            return new_description

    def update_group(
        self,
        username: str,
        group_id: Any,
        new_name: str = None,
        new_description: str = None,
    ) -> Group:
        """
        Change name and/or description. Both values are validated before
        either is applied. Returns a copy of the updated group.
        """
        with self.data.lock:
            group = self._find_owned_group(username, group_id)
            if new_name is not None and not _is_text(new_name):
                raise InvalidName()
            if new_description is not None and not _is_text(new_description):
                raise InvalidDescription()
            if new_name is not None:
                group.name = new_name
            if new_description is not None:
                group.description = new_description
            return copy.deepcopy(group)

    def delete_group(self, username: str, group_id: Any) -> bool:
        with self.data.lock:
            group = self._find_owned_group(username, group_id)
            del self.data.groups[group.id]
            self.reconciler.reconcile(group.id)

        logger.info(f"Deleted group {group.id} owned by {username}")
        return True

    def delete_groups_owned_by(self, username: str) -> List[int]:
        """Delete every group owned by `username`. Used when a user is deregistered."""
        with self.data.lock:
            owned = [g.id for g in self.data.groups.values() if g.owner == username]
            for group_id in owned:
                self.delete_group(username, group_id)
        return owned

    def add_game(self, username: str, group_id: Any, game: Union[Game, dict]) -> str:
        if isinstance(game, dict):
            game = Game.from_dict(game)
        with self.data.lock:
            group = self._find_owned_group(username, group_id)
            if not _is_text(game.id):
                raise InvalidGame()
            if game.id in group.games:
                raise GameAlreadyInGroup(f"Group {group.id} already has game {game.id}")
            group.games[game.id] = copy.copy(game)
            return game.id

    def remove_game(self, username: str, group_id: Any, game_id: str) -> bool:
        with self.data.lock:
            group = self._find_owned_group(username, group_id)
            if game_id not in group.games:
                raise GameNotInGroup(f"Group {group.id} does not have game {game_id}")
            del group.games[game_id]
            return True

    def group_has_game(self, group_id: Any, game_id: str) -> bool:
        with self.data.lock:
            group = self.data.groups.get(normalize_group_id(group_id))
            return group is not None and game_id in group.games

    def list_game_names(self, group_id: Any) -> List[str]:
        with self.data.lock:
            return self._find_group(group_id).game_names()
