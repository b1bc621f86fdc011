import logging
import uuid
from typing import Optional

from .data_mem import DataMem
from .errors import InvalidUsername, UserAlreadyExists, UserNotFound
from .group_store import GroupStore
from .models import User

logger = logging.getLogger(__name__)


class TokenRegistry:
    """Registers identities and maps their opaque bearer tokens to usernames."""

    def __init__(self, data: DataMem, groups: GroupStore):
        self.data = data
        self.groups = groups

    def register(self, username: str) -> str:
        if not isinstance(username, str) or username == '':
            raise InvalidUsername()
        with self.data.lock:
            if username in self.data.users:
                raise UserAlreadyExists(f"User '{username}' already exists")
            token = str(uuid.uuid4())
            self.data.tokens[token] = username
            self.data.users[username] = User(username=username)

        logger.info(f"Registered user {username}")
        return token

    def resolve_token(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        return self.data.tokens.get(token)

    def deregister_user(self, username: str) -> bool:
        """
        Remove a user, revoke its tokens and delete the groups it owns.
        """
        with self.data.lock:
            if username not in self.data.users:
                raise UserNotFound(f"User '{username}' does not exist")

            owned = self.groups.delete_groups_owned_by(username)
            del self.data.users[username]
            revoked = [t for t, name in self.data.tokens.items() if name == username]
            for token in revoked:
                del self.data.tokens[token]

        logger.info(
            f"Deregistered user {username}: {len(owned)} group(s) deleted, "
            f"{len(revoked)} token(s) revoked"
        )
        return True
