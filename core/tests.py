from unittest import mock

from django.db import IntegrityError, OperationalError
from django.test import TestCase, Client, override_settings
from django.urls import reverse

from .api import remap
from .exceptions import NotFound, SlotUnavailable


class HealthCheckTests(TestCase):

    def setUp(self):
        self.client = Client()

    def test_api_status(self):
        response = self.client.get(reverse('core:api_status'))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['message'], 'API is running!')
        self.assertIn('timestamp', body)

    def test_database_status_returns_server_time(self):
        response = self.client.get(reverse('core:database_status'))
        self.assertEqual(response.status_code, 200)
        self.assertIn('serverTime', response.json())

    def test_wrong_method_is_405(self):
        response = self.client.post(reverse('core:api_status'))
        self.assertEqual(response.status_code, 405)
        self.assertFalse(response.json()['success'])

    def test_unknown_route_is_json_404(self):
        response = self.client.get('/api/does-not-exist')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'success': False, 'message': 'Route not found'})

    def test_requests_are_logged(self):
        with self.assertLogs('core.middleware', level='INFO') as logs:
            self.client.get(reverse('core:api_status'))
        self.assertIn('GET /api/test -> 200', logs.output[0])


class StoreErrorTests(TestCase):
    """Store failures are classified, and the driver text stays server-side unless exposed."""

    def setUp(self):
        self.client = Client()

    @override_settings(API_EXPOSE_ERRORS=False)
    def test_operational_error_is_503_and_redacted(self):
        with mock.patch('core.views.server_time', side_effect=OperationalError('ORA-12541: no listener')):
            with self.assertLogs('core.api', level='ERROR'):
                response = self.client.get(reverse('core:database_status'))
        self.assertEqual(response.status_code, 503)
        body = response.json()
        self.assertEqual(body['message'], 'Database unavailable')
        self.assertNotIn('error', body)

    @override_settings(API_EXPOSE_ERRORS=True)
    def test_raw_error_exposed_when_enabled(self):
        with mock.patch('core.views.server_time', side_effect=OperationalError('ORA-12541: no listener')):
            with self.assertLogs('core.api', level='ERROR'):
                response = self.client.get(reverse('core:database_status'))
        self.assertEqual(response.json()['error'], 'ORA-12541: no listener')

    @override_settings(API_EXPOSE_ERRORS=False)
    def test_integrity_error_is_400(self):
        with mock.patch('core.views.server_time', side_effect=IntegrityError('duplicate key')):
            with self.assertLogs('core.api', level='ERROR'):
                response = self.client.get(reverse('core:database_status'))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'The request conflicts with existing data')


@override_settings(ENABLE_SQL_CONSOLE=True)
class SqlConsoleTests(TestCase):

    def setUp(self):
        self.client = Client()
        self.url = reverse('core:sql_console')

    def run_query(self, query):
        return self.client.post(self.url, {'query': query}, content_type='application/json')

    def test_select(self):
        response = self.run_query('SELECT 1 AS one')
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['queryType'], 'SELECT')
        self.assertEqual(body['columns'], ['one'])
        self.assertEqual(body['rows'], [{'one': 1}])
        self.assertEqual(body['rowCount'], 1)
        self.assertNotIn('rowsAffected', body)

    def test_forbidden_keyword(self):
        response = self.run_query('grant all privileges to someone')
        self.assertEqual(response.status_code, 403)
        self.assertIn('GRANT', response.json()['message'])

    def test_query_required(self):
        response = self.client.post(self.url, {}, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Query is required')

    def test_invalid_json_body(self):
        response = self.client.post(self.url, 'not json', content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Request body is not valid JSON')

    @override_settings(ENABLE_SQL_CONSOLE=False)
    def test_disabled_by_flag(self):
        response = self.run_query('SELECT 1')
        self.assertEqual(response.status_code, 404)


class ApiHelperTests(TestCase):

    def test_remap_renames_known_keys_only(self):
        self.assertEqual(
            remap({'firstName': 'Ali', 'email': 'a@b.my'}, {'firstName': 'first_name'}),
            {'first_name': 'Ali', 'email': 'a@b.my'}
        )

    def test_error_defaults(self):
        self.assertEqual(SlotUnavailable().status_code, 400)
        self.assertEqual(SlotUnavailable().message, 'This time slot is already booked for this doctor')
        self.assertEqual(NotFound('Patient not found').message, 'Patient not found')


@override_settings(CORS_ALLOWED_ORIGINS=['http://localhost:3000'])
class CorsTests(TestCase):

    def preflight(self, origin):
        return self.client.options(
            '/api/appointments',
            HTTP_ORIGIN=origin,
            HTTP_ACCESS_CONTROL_REQUEST_METHOD='PATCH',
            HTTP_ACCESS_CONTROL_REQUEST_HEADERS='content-type',
        )

    def test_preflight_from_web_client(self):
        response = self.preflight('http://localhost:3000')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Access-Control-Allow-Origin'], 'http://localhost:3000')
        self.assertEqual(response['Access-Control-Allow-Credentials'], 'true')
        self.assertIn('PATCH', response['Access-Control-Allow-Methods'])

    def test_unknown_origin_gets_no_cors_headers(self):
        response = self.preflight('http://evil.example')
        self.assertNotIn('Access-Control-Allow-Origin', response)

    def test_simple_request_carries_origin(self):
        response = self.client.get(reverse('core:api_status'), HTTP_ORIGIN='http://localhost:3000')
        self.assertEqual(response['Access-Control-Allow-Origin'], 'http://localhost:3000')
