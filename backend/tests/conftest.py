"""
Pytest fixtures for kitchen backend tests.

Every test gets a fresh in-memory database loaded with the demo kitchen:
four business units, ten users, three recipes, a small production plan,
batches, waste records and checklist items.
"""

import pytest

from kitchen import create_app
from kitchen.extensions import db
from kitchen.services import seed_service


# Demo accounts (see seed_service.DEMO_USERS)
SUPER_ADMIN = "super@kitchen.com"               # Admin, every unit
PRODUCTION_CHIEF = "ulises@kitchen.com"         # Producción, prod-central
SERVICE_POLANCO = "servicio.polanco@kitchen.com"  # Servicio, polanco
KITCHEN_POLANCO = "cocina.polanco@kitchen.com"  # Cocina, polanco
REGIONAL_CHEF = "chef.regional@kitchen.com"     # Cocina, polanco + tecamachalco
BRANCH_ADMIN = "admin.sucursales@kitchen.com"   # Admin, three branches
MARKETING_ADMIN = "marketing@kitchen.com"       # Admin with produccion/lotes overridden to none


@pytest.fixture(scope='function')
def app():
    """Create application with a seeded in-memory database."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SEED_DEMO_DATA': False,
    })

    with app.app_context():
        db.create_all()
        seed_service.seed_demo_data()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    return db.session


def get_auth_token(client, email: str, unit_id: str | None = None) -> str:
    """Helper to log in and optionally pick the active unit."""
    response = client.post('/api/auth/login', json={'email': email})
    assert response.status_code == 200, response.get_json()
    token = response.get_json()['token']

    if unit_id is not None:
        response = client.post(
            '/api/auth/select-unit',
            json={'unit_id': unit_id},
            headers=auth_headers(token),
        )
        assert response.status_code == 200, response.get_json()
    return token


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def super_headers(client):
    """Super-admin in the global view."""
    return auth_headers(get_auth_token(client, SUPER_ADMIN, 'all'))


@pytest.fixture
def production_headers(client):
    """Production chief; single unit, active on login."""
    return auth_headers(get_auth_token(client, PRODUCTION_CHIEF))


@pytest.fixture
def service_headers(client):
    return auth_headers(get_auth_token(client, SERVICE_POLANCO))


@pytest.fixture
def kitchen_headers(client):
    return auth_headers(get_auth_token(client, KITCHEN_POLANCO))
