"""
Tests for the profile page and travel preferences.
"""

import pytest


@pytest.fixture
def company(fake_db):
    return fake_db.seed('company_profiles', [
        {'user_id': fake_db.traveler.id, 'company_name': 'Empresa Viajera',
         'rfc': 'EVI010101AB1', 'industry': 'Logística', 'city': 'Monterrey'},
    ])[0]


class TestProfileTabs:
    """Sections of the profile page."""

    def test_requires_login(self, client):
        assert client.get('/profile/').status_code == 302

    def test_profile_tab(self, authenticated_client, company):
        response = authenticated_client.get('/profile/')
        assert response.status_code == 200
        assert b'Ana Viajera' in response.data
        assert b'viajero@empresa.test' in response.data
        assert b'Empresa Viajera' in response.data
        assert b'EVI010101AB1' in response.data

    def test_profile_without_company(self, authenticated_client):
        response = authenticated_client.get('/profile/')
        assert response.status_code == 200
        assert b'No especificado' in response.data

    def test_preferences_tab_empty(self, authenticated_client):
        response = authenticated_client.get('/profile/?tab=preferences')
        assert response.status_code == 200
        assert b'Preferencias de Viaje' in response.data
        assert b'No especificado' in response.data

    def test_preferences_edit_mode(self, authenticated_client, fake_db):
        fake_db.seed('user_preferences', [
            {'user_id': fake_db.traveler.id, 'preferred_hotel': 'Hilton',
             'frequent_changes': True, 'avoid_locations': 'Centro'},
        ])
        response = authenticated_client.get('/profile/?tab=preferences&edit=1')
        assert b'name="preferred_hotel"' in response.data
        assert b'value="Hilton"' in response.data

    def test_payments_tab(self, authenticated_client, fake_db):
        fake_db.seed('payments', [
            {'user_id': fake_db.traveler.id, 'amount': 2400, 'currency': 'mxn',
             'status': 'completed',
             'bookings': {'confirmation_code': 'RES300001', 'hotel_name': 'Fiesta Inn',
                          'check_in': '2025-05-01', 'check_out': '2025-05-03'}},
        ])
        response = authenticated_client.get('/profile/?tab=payments')
        assert b'Historial de Pagos' in response.data
        assert b'RES300001' in response.data
        assert b'$2,400.00' in response.data

    def test_unknown_tab(self, authenticated_client):
        response = authenticated_client.get('/profile/?tab=secret')
        assert 'Información Personal'.encode() in response.data

    def test_load_error(self, authenticated_client, fake_db):
        fake_db.fail_tables['company_profiles'] = True
        response = authenticated_client.get('/profile/')
        assert response.status_code == 200
        assert b'Error al cargar el perfil' in response.data


class TestSavePreferences:
    """Create or update of the preferences row."""

    def test_insert_when_missing(self, authenticated_client, fake_db):
        response = authenticated_client.post('/profile/preferences', data={
            'preferred_hotel': ' Fiesta Inn ',
            'frequent_changes': 'y',
            'avoid_locations': 'Zona industrial',
        }, follow_redirects=True)

        assert b'Preferencias guardadas correctamente' in response.data
        rows = fake_db.tables['user_preferences']
        assert len(rows) == 1
        assert rows[0]['user_id'] == fake_db.traveler.id
        assert rows[0]['preferred_hotel'] == 'Fiesta Inn'
        assert rows[0]['frequent_changes'] is True
        assert rows[0]['avoid_locations'] == 'Zona industrial'

    def test_update_existing(self, authenticated_client, fake_db):
        fake_db.seed('user_preferences', [
            {'user_id': fake_db.traveler.id, 'preferred_hotel': 'Hilton',
             'frequent_changes': True, 'avoid_locations': ''},
        ])
        authenticated_client.post('/profile/preferences', data={
            'preferred_hotel': 'City Express',
            'avoid_locations': '',
        })

        rows = fake_db.tables['user_preferences']
        assert len(rows) == 1
        assert rows[0]['preferred_hotel'] == 'City Express'
        assert rows[0]['frequent_changes'] is False

    def test_too_long_value_rejected(self, authenticated_client, fake_db):
        response = authenticated_client.post('/profile/preferences', data={
            'preferred_hotel': 'x' * 201,
        })
        assert response.status_code == 302
        assert 'edit=1' in response.location
        assert 'user_preferences' not in fake_db.tables

    def test_save_error(self, authenticated_client, fake_db):
        fake_db.fail_tables['user_preferences'] = True
        response = authenticated_client.post('/profile/preferences', data={
            'preferred_hotel': 'Hilton',
        }, follow_redirects=True)
        assert b'Error al guardar las preferencias' in response.data
