"""
Tests for the user bookings report: listing, deletion, payment,
billing option and PDF export.
"""

from unittest.mock import patch, MagicMock

import pytest

CHECKOUT_POST = 'blueprints.payments.services.checkout_service.requests.post'


@pytest.fixture
def traveler_bookings(fake_db):
    """Two bookings of the traveler and one of the admin."""
    return fake_db.seed('bookings', [
        {'confirmation_code': 'RES200001', 'user_id': fake_db.traveler.id,
         'hotel_name': 'Fiesta Inn', 'check_in': '2025-05-01', 'check_out': '2025-05-03',
         'room_type': 'single', 'total_price': 2400, 'status': 'pending'},
        {'confirmation_code': 'RES200002', 'user_id': fake_db.traveler.id,
         'hotel_name': 'Hilton', 'check_in': '2025-06-10', 'check_out': '2025-06-12',
         'room_type': 'double', 'total_price': 5000, 'status': 'completed'},
        {'confirmation_code': 'RES200003', 'user_id': fake_db.admin.id,
         'hotel_name': 'City Express', 'check_in': '2025-07-01', 'check_out': '2025-07-02',
         'room_type': 'single', 'total_price': 900, 'status': 'pending'},
    ])


class TestReport:
    """Bookings list."""

    def test_requires_login(self, client):
        response = client.get('/bookings/')
        assert response.status_code == 302

    def test_lists_own_bookings(self, authenticated_client, traveler_bookings):
        response = authenticated_client.get('/bookings/')
        assert response.status_code == 200
        assert b'RES200001' in response.data
        assert b'RES200002' in response.data
        assert b'RES200003' not in response.data
        assert 'Factura mensual consolidada'.encode() in response.data

    def test_status_filter(self, authenticated_client, traveler_bookings):
        response = authenticated_client.get('/bookings/?status=completed')
        assert b'RES200002' in response.data
        assert b'RES200001' not in response.data

    def test_search(self, authenticated_client, traveler_bookings):
        response = authenticated_client.get('/bookings/?search=fiesta')
        assert b'RES200001' in response.data
        assert b'RES200002' not in response.data

    def test_invoices(self, authenticated_client, fake_db):
        fake_db.seed('invoices', [
            {'user_id': fake_db.traveler.id, 'invoice_number': 'FAC-0001',
             'total_amount': 2400, 'status': 'completed'},
        ])
        response = authenticated_client.get('/bookings/')
        assert b'FAC-0001' in response.data

    def test_load_error(self, authenticated_client, fake_db):
        fake_db.fail_tables['bookings'] = True
        response = authenticated_client.get('/bookings/')
        assert response.status_code == 200
        assert b'Error al cargar las reservaciones' in response.data


class TestDelete:
    """Deleting bookings."""

    def test_delete_own(self, authenticated_client, fake_db, traveler_bookings):
        booking_id = traveler_bookings[0]['id']
        response = authenticated_client.post(f'/bookings/{booking_id}/delete', follow_redirects=True)

        assert 'Reservación eliminada'.encode() in response.data
        codes = [b['confirmation_code'] for b in fake_db.tables['bookings']]
        assert 'RES200001' not in codes

    def test_cannot_delete_foreign(self, authenticated_client, fake_db, traveler_bookings):
        booking_id = traveler_bookings[2]['id']
        response = authenticated_client.post(f'/bookings/{booking_id}/delete', follow_redirects=True)

        assert 'No se encontró la reservación'.encode() in response.data
        assert len(fake_db.tables['bookings']) == 3


class TestPay:
    """Starting checkout from the report."""

    def test_pending_booking_redirects_to_checkout(self, authenticated_client, traveler_bookings):
        booking_id = traveler_bookings[0]['id']
        checkout = MagicMock(ok=True, status_code=200)
        checkout.json.return_value = {'url': 'https://pay.test/session/9'}

        with patch(CHECKOUT_POST, return_value=checkout) as mock_post:
            response = authenticated_client.post(f'/bookings/{booking_id}/pay')

        assert response.status_code == 303
        assert response.location == 'https://pay.test/session/9'
        payment_data = mock_post.call_args.kwargs['json']['payment_data']
        assert payment_data['line_items'][0]['price_data']['unit_amount'] == 240000
        assert payment_data['cancel_url'] == 'http://localhost/bookings/'

    def test_completed_booking_not_payable(self, authenticated_client, traveler_bookings):
        booking_id = traveler_bookings[1]['id']
        with patch(CHECKOUT_POST) as mock_post:
            response = authenticated_client.post(f'/bookings/{booking_id}/pay', follow_redirects=True)

        mock_post.assert_not_called()
        assert 'Solo se pueden pagar reservaciones pendientes'.encode() in response.data

    def test_checkout_failure(self, authenticated_client, traveler_bookings):
        booking_id = traveler_bookings[0]['id']
        with patch(CHECKOUT_POST, return_value=MagicMock(ok=False, status_code=500, text='boom')):
            response = authenticated_client.post(f'/bookings/{booking_id}/pay', follow_redirects=True)

        assert b'No se pudo iniciar el pago' in response.data


class TestBilling:
    """Billing option selection."""

    def test_valid_option(self, authenticated_client, traveler_bookings):
        booking_id = traveler_bookings[1]['id']
        response = authenticated_client.post(f'/bookings/{booking_id}/billing',
                                             data={'option': 'monthly'}, follow_redirects=True)
        assert 'Opción de facturación registrada: Factura mensual consolidada'.encode() in response.data

    def test_invalid_option(self, authenticated_client, traveler_bookings):
        booking_id = traveler_bookings[1]['id']
        response = authenticated_client.post(f'/bookings/{booking_id}/billing',
                                             data={'option': 'weekly'}, follow_redirects=True)
        assert 'Opción de facturación no válida'.encode() in response.data


class TestReportPdf:
    """PDF export."""

    def test_download(self, authenticated_client, traveler_bookings):
        response = authenticated_client.get('/bookings/report.pdf')

        assert response.status_code == 200
        assert response.mimetype == 'application/pdf'
        assert 'reporte-reservas.pdf' in response.headers['Content-Disposition']
        assert response.data.startswith(b'%PDF')

    def test_render_failure(self, authenticated_client, traveler_bookings):
        from utils.pdf import PdfRenderError

        with patch('blueprints.bookings.routes.render_pdf', side_effect=PdfRenderError('x')):
            response = authenticated_client.get('/bookings/report.pdf', follow_redirects=True)

        assert b'Error al generar el PDF' in response.data
