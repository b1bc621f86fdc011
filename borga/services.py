from typing import Any, List, Optional

from .admission_gate import AdmissionGate
from .catalog_client import CatalogClient
from .data_mem import DataMem
from .errors import CatalogUnavailable, NotAuthenticated
from .group_store import GroupStore
from .models import Game, Group, User
from .reconciler import Reconciler
from .token_registry import TokenRegistry
from .user_registry import UserRegistry


class BorgaServices:
    """
    Single entry point used by the web layer. Wires the registries around one
    DataMem and puts the admission gate in front of every catalog call.
    """

    def __init__(
        self,
        data: DataMem = None,
        gate: AdmissionGate = None,
        catalog: Optional[CatalogClient] = None,
    ):
        self.data = data or DataMem()
        self.gate = gate or AdmissionGate()
        self.catalog = catalog
        self.users = UserRegistry(self.data)
        self.reconciler = Reconciler(self.data, self.users)
        self.groups = GroupStore(self.data, self.users, self.reconciler)
        self.tokens = TokenRegistry(self.data, self.groups)

    @classmethod
    def from_config(cls, config) -> "BorgaServices":
        gate = AdmissionGate(
            base_delay=config['GATE_BASE_DELAY'],
            max_depth=config.get('GATE_MAX_DEPTH'),
        )
        catalog = CatalogClient(
            config['CATALOG_BASE_URL'],
            client_id=config.get('CATALOG_CLIENT_ID', ''),
            timeout=config.get('CATALOG_TIMEOUT', 10),
        )
        return cls(gate=gate, catalog=catalog)

    # ==================== Identity ====================

    def register(self, username: str) -> str:
        return self.tokens.register(username)

    def resolve_token(self, token: Optional[str]) -> Optional[str]:
        return self.tokens.resolve_token(token)

    def authenticate(self, token: Optional[str]) -> str:
        """Resolve a bearer token or raise NotAuthenticated."""
        username = self.tokens.resolve_token(token)
        if username is None:
            raise NotAuthenticated()
        return username

    def deregister_user(self, username: str) -> bool:
        return self.tokens.deregister_user(username)

    # ==================== Users ====================

    def user_exists(self, username: str) -> bool:
        return self.users.user_exists(username)

    def list_users(self) -> List[str]:
        return self.users.list_users()

    def get_user(self, username: str) -> User:
        return self.users.get_user(username)

    def attach_group(self, username: str, group_id: Any) -> int:
        return self.users.attach_group(username, group_id)

    def detach_group(self, username: str, group_id: Any) -> bool:
        return self.users.detach_group(username, group_id)

    def list_user_groups(self, username: str) -> List[Group]:
        return self.users.list_user_groups(username)

    # ==================== Groups ====================

    def group_exists(self, group_id: Any) -> bool:
        return self.groups.group_exists(group_id)

    def create_group(self, owner: str, name: str, description: str) -> int:
        return self.groups.create_group(owner, name, description)

    def get_group(self, group_id: Any) -> Group:
        return self.groups.get_group(group_id)

    def get_group_details(self, group_id: Any) -> dict:
        return self.groups.get_group_details(group_id)

    def list_groups(self) -> List[dict]:
        return self.groups.list_groups()

    def rename_group(self, username: str, group_id: Any, new_name: str) -> str:
        return self.groups.rename_group(username, group_id, new_name)

    def redescribe_group(self, username: str, group_id: Any, new_description: str) -> str:
        return self.groups.redescribe_group(username, group_id, new_description)

    def update_group(self, username: str, group_id: Any, new_name: str = None,
                     new_description: str = None) -> Group:
        return self.groups.update_group(username, group_id, new_name, new_description)

    def delete_group(self, username: str, group_id: Any) -> bool:
        return self.groups.delete_group(username, group_id)

    def add_game(self, username: str, group_id: Any, game) -> str:
        return self.groups.add_game(username, group_id, game)

    def remove_game(self, username: str, group_id: Any, game_id: str) -> bool:
        return self.groups.remove_game(username, group_id, game_id)

    def list_game_names(self, group_id: Any) -> List[str]:
        return self.groups.list_game_names(group_id)

    # ==================== Catalog (gated) ====================

    def _admitted_catalog(self) -> CatalogClient:
        """Wait at the gate and return the catalog to call."""
        if self.catalog is None:
            raise CatalogUnavailable("No game catalog is configured")
        self.gate.enter()
        return self.catalog

    def get_game_by_id(self, game_id: str) -> Game:
        return self._admitted_catalog().get_game_by_id(game_id)

    def search_games_by_name(self, name: str) -> List[Game]:
        return self._admitted_catalog().search_by_name(name)

    def popular_games(self, limit: int = 10) -> List[Game]:
        return self._admitted_catalog().popular_games(limit)

    def add_game_by_id(self, username: str, group_id: Any, game_id: str) -> str:
        """Look a game up in the catalog and add it to a group."""
        # Fail before spending a catalog call on a group the user cannot edit
        group = self.groups.get_owned_group(username, group_id)
        game = self.get_game_by_id(game_id)
        return self.groups.add_game(username, group.id, game)

    # ==================== Reset ====================

    def clear_users(self):
        self.data.clear_users()

    def clear_groups(self):
        self.data.clear_groups()

    def clear_tokens(self):
        self.data.clear_tokens()
