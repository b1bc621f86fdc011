"""
Pytest configuration and fixtures for Borga tests.
"""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

os.environ['FLASK_ENV'] = 'testing'

from borga.app import create_app
from borga.admission_gate import AdmissionGate
from borga.catalog_client import CatalogClient
from borga.models import Game
from borga.services import BorgaServices


@pytest.fixture
def gate():
    """Admission gate that never actually sleeps."""
    return AdmissionGate(base_delay=2, sleep=lambda seconds: None)


@pytest.fixture
def catalog(mocker):
    """Catalog client with its network calls mocked out."""
    mock = mocker.MagicMock(spec=CatalogClient)
    mock.get_game_by_id.side_effect = lambda game_id: Game(
        id=game_id,
        name=f'Game {game_id}',
        url=f'http://catalog.test/games/{game_id}',
        price='19.99'
    )
    return mock


@pytest.fixture
def services(gate, catalog):
    """Fresh service object with empty collections."""
    return BorgaServices(gate=gate, catalog=catalog)


@pytest.fixture
def alice(services):
    """Registered user 'alice'; returns the token."""
    return services.register('alice')


@pytest.fixture
def bob(services):
    """Registered user 'bob'; returns the token."""
    return services.register('bob')


@pytest.fixture
def sample_group(services, alice):
    """Group owned by alice."""
    return services.create_group('alice', 'Board Nights', 'weekly')


@pytest.fixture
def catan():
    return Game(id='G1', name='Catan', url='http://catalog.test/games/G1', price='45.4')


@pytest.fixture
def app(services):
    """Create application for testing."""
    return create_app('testing', services=services)


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def auth_header():
    def make(token):
        return {'Authorization': f'Bearer {token}'}
    return make
