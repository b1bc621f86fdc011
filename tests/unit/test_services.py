"""
Unit tests for BorgaServices: authentication, gated catalog access and the
end-to-end group scenario.
"""
import pytest
from borga.errors import CatalogUnavailable, NotAuthenticated, NotAuthorized, GroupNotFound
from borga.models import Game
from borga.services import BorgaServices


class TestAuthenticate:
    """Tests for authenticate method."""

    def test_valid_token(self, services, alice):
        """Should resolve a registered token to its username."""
        assert services.authenticate(alice) == 'alice'

    def test_unknown_token(self, services):
        """Should raise NotAuthenticated for an unknown token."""
        with pytest.raises(NotAuthenticated):
            services.authenticate('bogus')

    def test_missing_token(self, services):
        """Should raise NotAuthenticated when no token is given."""
        with pytest.raises(NotAuthenticated):
            services.authenticate(None)


class TestFromConfig:
    """Tests for from_config factory."""

    def test_builds_gate_and_catalog(self):
        """Should wire the gate and catalog from config values."""
        services = BorgaServices.from_config({
            'GATE_BASE_DELAY': 0.5,
            'GATE_MAX_DEPTH': 3,
            'CATALOG_BASE_URL': 'http://catalog.test/api',
            'CATALOG_CLIENT_ID': 'id',
            'CATALOG_TIMEOUT': 4,
        })

        assert services.gate.base_delay == 0.5
        assert services.gate.max_depth == 3
        assert services.catalog.base_url == 'http://catalog.test/api'
        assert services.catalog.timeout == 4


class TestGatedCatalog:
    """Every catalog call must pass the admission gate first."""

    def test_gate_before_catalog(self, services, catalog, mocker):
        """Should pass the gate before calling the catalog."""
        calls = []
        mocker.patch.object(services.gate, 'enter', side_effect=lambda: calls.append('gate'))
        catalog.get_game_by_id.side_effect = lambda game_id: calls.append('catalog') or Game(game_id, 'X')

        services.get_game_by_id('G1')

        assert calls == ['gate', 'catalog']

    def test_search_and_popular_are_gated(self, services, catalog, mocker):
        """Should pass the gate on search and popular queries too."""
        enter = mocker.patch.object(services.gate, 'enter')
        catalog.search_by_name.return_value = []
        catalog.popular_games.return_value = []

        services.search_games_by_name('catan')
        services.popular_games(5)

        assert enter.call_count == 2
        catalog.popular_games.assert_called_once_with(5)

    def test_add_game_by_id(self, services, sample_group):
        """Should fetch the game from the catalog and add it."""
        assert services.add_game_by_id('alice', sample_group, 'G7') == 'G7'
        assert services.list_game_names(sample_group) == ['Game G7']

    def test_add_game_by_id_non_owner_skips_catalog(self, services, bob, sample_group, catalog):
        """Should check ownership before calling the catalog."""
        with pytest.raises(NotAuthorized):
            services.add_game_by_id('bob', sample_group, 'G7')
        catalog.get_game_by_id.assert_not_called()

    def test_add_game_by_id_unknown_group_skips_catalog(self, services, alice, catalog):
        """Should check the group exists before calling the catalog."""
        with pytest.raises(GroupNotFound):
            services.add_game_by_id('alice', 77, 'G7')
        catalog.get_game_by_id.assert_not_called()


class TestWithoutCatalog:
    """Catalog calls on a service built without a catalog client."""

    def test_fails_before_waiting(self, gate, mocker):
        """Should raise CatalogUnavailable without spending time at the gate."""
        services = BorgaServices(gate=gate)
        enter = mocker.spy(gate, 'enter')

        with pytest.raises(CatalogUnavailable):
            services.get_game_by_id('G1')
        with pytest.raises(CatalogUnavailable):
            services.search_games_by_name('catan')
        with pytest.raises(CatalogUnavailable):
            services.popular_games(3)

        assert enter.call_count == 0


class TestEndToEnd:
    """Register, create a group, add a game, delete the group."""

    def test_alice_scenario(self, services, catan):
        """Should run a full register, create, add game and delete cycle."""
        token = services.register('alice')
        assert services.resolve_token(token) == 'alice'

        group_id = services.create_group('alice', 'Board Nights', 'weekly')
        assert group_id == 1

        groups = services.list_user_groups('alice')
        assert [g.id for g in groups] == [1]

        assert services.add_game('alice', 1, catan) == 'G1'
        assert services.get_group_details(1) == {
            'name': 'Board Nights',
            'description': 'weekly',
            'games': ['Catan'],
        }

        assert services.delete_group('alice', 1) is True
        assert services.list_user_groups('alice') == []
