from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from .errors import InvalidGroupId


def normalize_group_id(group_id: Any) -> int:
    """Convert a group id given as int or numeric string to the canonical int."""
    if isinstance(group_id, bool):
        raise InvalidGroupId(f"Invalid group id: {group_id!r}")
    if isinstance(group_id, int):
        return group_id
    if isinstance(group_id, str) and group_id.isascii() and group_id.isdigit():
        return int(group_id)
    raise InvalidGroupId(f"Invalid group id: {group_id!r}")


@dataclass
class Game:
    id: str
    name: str
    url: Optional[str] = None
    price: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'url': self.url,
            'price': self.price,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Game":
        return cls(
            id=data.get('id'),
            name=data.get('name'),
            url=data.get('url'),
            price=data.get('price'),
        )


@dataclass
class Group:
    id: int
    owner: str
    name: str
    description: str
    games: Dict[str, Game] = field(default_factory=dict)

    def game_names(self) -> List[str]:
        return [game.name for game in self.games.values()]

    def details(self) -> dict:
        """Summary shape: games reduced to their display names."""
        return {
            'name': self.name,
            'description': self.description,
            'games': self.game_names(),
        }

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'owner': self.owner,
            'name': self.name,
            'description': self.description,
            'games': [game.to_dict() for game in self.games.values()],
        }


@dataclass
class User:
    username: str
    groups: List[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'username': self.username,
            'groups': list(self.groups),
        }
