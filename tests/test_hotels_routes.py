"""
Tests for hotel search and the manual reservation flow.
"""

from datetime import timedelta
from unittest.mock import patch, MagicMock

import pytest
from werkzeug.datastructures import MultiDict

from blueprints.hotels.services import parse_reservation_form, validate_manual_reservation
from utils.datetime_helpers import get_today

CHECKOUT_POST = 'blueprints.payments.services.checkout_service.requests.post'

# Dates are relative to today in the configured timezone
pytestmark = pytest.mark.usefixtures("app")


@pytest.fixture
def catalogue(fake_db, hotel_rows):
    return fake_db.seed('hoteles', hotel_rows)


def future(days):
    return (get_today() + timedelta(days=days)).isoformat()


class TestSearchPage:

    def test_requires_login(self, client, catalogue):
        assert client.get('/hotels/').status_code == 302

    def test_initial_sample(self, authenticated_client, catalogue):
        response = authenticated_client.get('/hotels/')
        assert response.status_code == 200
        assert b'Algunos hoteles sugeridos' in response.data
        assert response.data.count(b'class="hotel-card"') == 3

    def test_filtered_search(self, authenticated_client, catalogue):
        response = authenticated_client.get('/hotels/?searched=1&state=Jalisco')
        assert b'/hotels/1/reserve' in response.data
        assert b'/hotels/3/reserve' in response.data
        assert b'/hotels/2/reserve' not in response.data

    def test_no_results(self, authenticated_client, catalogue):
        response = authenticated_client.get('/hotels/?searched=1&search=cancun')
        assert b'No se encontraron hoteles' in response.data

    def test_load_error(self, authenticated_client, fake_db):
        fake_db.fail_tables['hoteles'] = True
        response = authenticated_client.get('/hotels/')
        assert response.status_code == 200
        assert b'Error al cargar los hoteles' in response.data


class TestReservationRules:

    def form(self, **values):
        data = MultiDict({'check_in': future(5), 'check_out': future(7),
                          'room_type': 'single', 'people': '1', 'main_guest': 'Ana'})
        for key, value in values.items():
            if isinstance(value, list):
                data.setlist(key, value)
            else:
                data[key] = value
        return data

    def test_parse_trims_additional_guests(self):
        data = parse_reservation_form(self.form(people='2', additional_guests=['Luis', 'Extra']))
        assert data['additional_guests'] == ['Luis']

    def test_parse_defaults(self):
        data = parse_reservation_form(self.form(main_guest='', room_type='suite', people='x'),
                                      default_guest='Ana Viajera')
        assert data['main_guest'] == 'Ana Viajera'
        assert data['room_type'] == 'single'
        assert data['people'] == 0

    def test_valid(self):
        assert validate_manual_reservation(parse_reservation_form(self.form())) == (True, '')

    def test_missing_dates(self):
        ok, _ = validate_manual_reservation(parse_reservation_form(self.form(check_out='')))
        assert ok is False

    def test_past_check_in(self):
        data = parse_reservation_form(self.form(check_in=future(-1)))
        assert validate_manual_reservation(data) == (
            False, 'La fecha de entrada no puede ser anterior a hoy')

    def test_check_in_today_allowed(self):
        data = parse_reservation_form(self.form(check_in=future(0), check_out=future(1)))
        assert validate_manual_reservation(data)[0] is True

    def test_checkout_not_after_checkin(self):
        data = parse_reservation_form(self.form(check_out=future(5)))
        assert validate_manual_reservation(data)[1].startswith('La fecha de salida')

    def test_capacity(self):
        single = parse_reservation_form(self.form(people='3'))
        double = parse_reservation_form(self.form(people='4', room_type='double'))
        assert validate_manual_reservation(single)[1] == \
            'Número de personas no permitido para el tipo de habitación'
        assert validate_manual_reservation(double)[0] is True


class TestReservePage:

    def test_form(self, authenticated_client, catalogue):
        response = authenticated_client.get('/hotels/1/reserve')
        assert response.status_code == 200
        assert b'Fiesta Inn' in response.data
        assert b'value="Ana Viajera"' in response.data

    def test_unknown_hotel(self, authenticated_client, catalogue):
        response = authenticated_client.get('/hotels/99/reserve', follow_redirects=True)
        assert 'No se encontró información del hotel'.encode() in response.data

    def test_validation_error_rerenders(self, authenticated_client, fake_db, catalogue):
        response = authenticated_client.post('/hotels/1/reserve', data={
            'check_in': future(3), 'check_out': future(5),
            'room_type': 'single', 'people': '3', 'main_guest': 'Ana',
        })
        assert response.status_code == 200
        assert 'Número de personas no permitido'.encode() in response.data
        assert 'bookings' not in fake_db.tables

    def test_success_stores_booking_and_redirects(self, authenticated_client, fake_db, catalogue):
        checkout = MagicMock(ok=True, status_code=200)
        checkout.json.return_value = {'url': 'https://pay.test/session/5'}

        with patch(CHECKOUT_POST, return_value=checkout) as mock_post:
            response = authenticated_client.post('/hotels/1/reserve', data={
                'check_in': future(3), 'check_out': future(5),
                'room_type': 'double', 'people': '2', 'main_guest': 'Ana',
                'additional_guests': 'Luis',
            })

        assert response.status_code == 303
        assert response.location == 'https://pay.test/session/5'

        booking = fake_db.tables['bookings'][0]
        assert booking['hotel_name'] == 'Fiesta Inn'
        assert booking['status'] == 'pending'
        assert booking['total_price'] == 3000.0
        assert booking['user_id'] == fake_db.traveler.id
        assert booking['image_url'] == 'https://img.test/fi.jpg'

        payment_data = mock_post.call_args.kwargs['json']['payment_data']
        assert payment_data['line_items'][0]['price_data']['unit_amount'] == 300000

    def test_checkout_failure_keeps_pending_booking(self, authenticated_client, fake_db, catalogue):
        with patch(CHECKOUT_POST, return_value=MagicMock(ok=False, status_code=502, text='')):
            response = authenticated_client.post('/hotels/2/reserve', data={
                'check_in': future(3), 'check_out': future(4),
                'room_type': 'single', 'people': '1', 'main_guest': 'Ana',
            })

        assert response.status_code == 302
        assert response.location.endswith('/bookings/')
        assert fake_db.tables['bookings'][0]['status'] == 'pending'
