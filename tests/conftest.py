"""
Pytest configuration and fixtures.
The Supabase client is replaced by an in-memory fake so tests never reach
the hosted backend.
"""

import os
import pytest
from flask.testing import FlaskClient

from fake_supabase import FakeSupabase

TRAVELER_EMAIL = 'viajero@empresa.test'
TRAVELER_PASSWORD = 'secret123'
ADMIN_EMAIL = 'admin@noktos.test'
ADMIN_PASSWORD = 'admin123'


class RequestScopedClient(FlaskClient):
    """Test client that gives every request its own app context, so g never
    leaks from one request to the next."""

    def open(self, *args, **kwargs):
        with self.application.app_context():
            return super().open(*args, **kwargs)


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['FLASK_ENV'] = 'test'
    yield


@pytest.fixture
def fake_db():
    """Fresh in-memory backend with a traveler and an admin account."""
    db = FakeSupabase()
    traveler = db.auth.add_user(TRAVELER_EMAIL, TRAVELER_PASSWORD,
                                full_name='Ana Viajera', phone='5512345678')
    admin = db.auth.add_user(ADMIN_EMAIL, ADMIN_PASSWORD, full_name='Admin Noktos')
    db.seed('users', [
        {'id': traveler.id, 'email': TRAVELER_EMAIL},
        {'id': admin.id, 'email': ADMIN_EMAIL},
    ])
    db.traveler = traveler
    db.admin = admin
    return db


@pytest.fixture
def app(fake_db, monkeypatch):
    """Create test application backed by the fake client."""
    from app import create_app

    monkeypatch.setattr('database.connection.create_client', lambda url, key: fake_db.connect())

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.test_client_class = RequestScopedClient

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def authenticated_client(app, client):
    """Create test client logged in as a regular traveler."""
    client.post('/login', data={
        'email': TRAVELER_EMAIL,
        'password': TRAVELER_PASSWORD
    }, follow_redirects=True)
    return client


@pytest.fixture
def admin_client(app, client):
    """Create test client logged in as an administrator."""
    client.post('/login', data={
        'email': ADMIN_EMAIL,
        'password': ADMIN_PASSWORD
    }, follow_redirects=True)
    return client


@pytest.fixture
def hotel_rows():
    """Catalogue rows with the remote column names."""
    return [
        {
            'id_interno': 1, 'ID': 101, 'TIPO DE NEGOCIACION': 'Tarifa fija',
            'MARCA': 'Fiesta Inn', 'ESTADO': 'Jalisco', 'CIUDAD / ZONA': 'Guadalajara',
            'TARIFA HAB SENCILLA Q': 1200, 'TARIFA HAB DOBLE QQ': 1500,
            'MENORES DE EDAD': 'Gratis', 'Desayuno': 'Incluido', 'IMAGES': 'https://img.test/fi.jpg',
        },
        {
            'id_interno': 2, 'ID': 102, 'TIPO DE NEGOCIACION': 'Tarifa fija',
            'MARCA': 'City Express', 'ESTADO': 'Nuevo León', 'CIUDAD / ZONA': 'Monterrey',
            'TARIFA HAB SENCILLA Q': 900, 'TARIFA HAB DOBLE QQ': 1100,
            'MENORES DE EDAD': '', 'Desayuno': '', 'IMAGES': '',
        },
        {
            'id_interno': 3, 'ID': 103, 'TIPO DE NEGOCIACION': 'Dinámica',
            'MARCA': 'Hilton', 'ESTADO': 'Jalisco', 'CIUDAD / ZONA': 'Puerto Vallarta',
            'TARIFA HAB SENCILLA Q': '2500.50', 'TARIFA HAB DOBLE QQ': None,
            'MENORES DE EDAD': 'Con cargo', 'Desayuno': 'No incluido', 'IMAGES': None,
        },
    ]
