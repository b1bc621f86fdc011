import logging
from typing import List, Optional

import requests

from .errors import CatalogUnavailable, GameNotFound
from .models import Game

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Client for the external board game catalog (Board Game Atlas search API).
    Callers are expected to pass the admission gate before every call.
    """

    def __init__(
        self,
        base_url: str,
        client_id: str = '',
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.client_id = client_id
        self.timeout = timeout
        self.session = session or requests.Session()

    def _search(self, **params) -> List[dict]:
        params['client_id'] = self.client_id
        url = f"{self.base_url}/search"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json().get('games', [])
        except requests.exceptions.RequestException as e:
            logger.error(f"Catalog request failed {params}: {e}")
            raise CatalogUnavailable(f"Catalog request failed: {e}")
        except ValueError as e:
            logger.error(f"Catalog returned invalid JSON {params}: {e}")
            raise CatalogUnavailable("Catalog returned an invalid response")

    @staticmethod
    def _to_game(data: dict) -> Game:
        price = data.get('price')
        return Game(
            id=data.get('id'),
            name=data.get('name'),
            url=data.get('url'),
            price=str(price) if price is not None else None,
        )

    def get_game_by_id(self, game_id: str) -> Game:
        games = self._search(ids=game_id)
        for data in games:
            if data.get('id') == game_id:
                return self._to_game(data)
        raise GameNotFound(f"Game '{game_id}' not found in catalog")

    def search_by_name(self, name: str) -> List[Game]:
        return [self._to_game(data) for data in self._search(name=name)]

    def popular_games(self, limit: int = 10) -> List[Game]:
        games = self._search(order_by='rank', limit=limit)
        return [self._to_game(data) for data in games]
