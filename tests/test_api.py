"""
Tests for the HTTP surface: admin sessions, uploads and participant queries.
"""

import io
import pytest

from api.config import settings
from conftest import ADMIN_PASSWORD, XLSX_MIME, upload

EXAMPLE_ROW = {'Name': 'A', 'Roll No': '1', 'Year': '2', 'Section': 'CS'}


class TestAdminSession:
    """Test /admin/login and /admin/logout."""

    def test_login_success(self, client):
        response = client.post('/admin/login', json={'password': ADMIN_PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['sessionId']

    def test_each_login_gets_new_token(self, client):
        tokens = {
            client.post('/admin/login', json={'password': ADMIN_PASSWORD}).json()['sessionId']
            for _ in range(5)
        }

        assert len(tokens) == 5

    @pytest.mark.parametrize('payload', [
        {'password': 'wrong'},
        {'password': ''},
        {'password': ADMIN_PASSWORD + ' '},
        {},
    ])
    def test_login_failure(self, client, session_store, payload):
        response = client.post('/admin/login', json=payload)

        assert response.status_code == 401
        assert response.json() == {'success': False, 'message': 'Invalid password'}
        assert len(session_store) == 0

    def test_login_without_body(self, client, session_store):
        response = client.post('/admin/login')

        assert response.status_code == 401
        assert response.json() == {'success': False, 'message': 'Invalid password'}
        assert len(session_store) == 0

    def test_login_with_form_body(self, client, session_store):
        response = client.post('/admin/login', data={'password': ADMIN_PASSWORD})

        assert response.status_code == 401
        assert response.json() == {'success': False, 'message': 'Invalid password'}
        assert len(session_store) == 0

    @pytest.mark.parametrize('password', [123, None, [ADMIN_PASSWORD], {'value': ADMIN_PASSWORD}])
    def test_login_with_non_string_password(self, client, session_store, password):
        response = client.post('/admin/login', json={'password': password})

        assert response.status_code == 401
        assert response.json()['success'] is False
        assert len(session_store) == 0

    def test_logout_always_succeeds(self, client):
        assert client.post('/admin/logout').json() == {'success': True}
        assert client.post('/admin/logout', headers={'X-Session-Id': 'unknown'}).json() == {'success': True}

    def test_logout_revokes_token(self, client, admin_headers, make_workbook):
        assert client.post('/admin/logout', headers=admin_headers).status_code == 200

        response = upload(client, 'registered', make_workbook([EXAMPLE_ROW]), headers=admin_headers)

        assert response.status_code == 401
        assert response.json() == {'success': False, 'message': 'Session expired'}


class TestUpload:
    """Test /upload/{category}."""

    @pytest.mark.parametrize('category', ['registered', 'round1', 'winners'])
    def test_upload_reports_count(self, client, admin_headers, make_workbook, category):
        path = make_workbook([EXAMPLE_ROW, {**EXAMPLE_ROW, 'Name': 'B'}])

        response = upload(client, category, path, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {'success': True, 'count': 2}

    @pytest.mark.parametrize('headers', [{}, {'X-Session-Id': 'bogus'}, {'X-Session-Id': ''}])
    def test_rejects_without_valid_session(self, client, storage, upload_dir, make_workbook, headers):
        response = upload(client, 'registered', make_workbook([EXAMPLE_ROW]), headers=headers)

        assert response.status_code == 401
        assert response.json()['success'] is False
        assert storage.current_location('registered') is None
        assert list(upload_dir.iterdir()) == []

    def test_missing_file(self, client, admin_headers):
        response = client.post('/upload/registered', headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {'success': False, 'message': 'No file was uploaded.'}

    def test_file_under_wrong_field_name(self, client, admin_headers, storage, make_workbook):
        response = upload(client, 'winners', make_workbook([EXAMPLE_ROW]),
                          headers=admin_headers, field='registeredFile')

        assert response.status_code == 400
        assert storage.current_location('winners') is None
        assert storage.current_location('registered') is None

    def test_text_value_instead_of_file(self, client, admin_headers, storage):
        response = client.post(
            '/upload/registered',
            data={'registeredFile': 'abc'},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json() == {'success': False, 'message': 'No file was uploaded.'}
        assert storage.current_location('registered') is None

    def test_text_value_without_session(self, client, storage):
        response = client.post('/upload/winners', data={'winnersFile': 'abc'})

        assert response.status_code == 401
        assert response.json()['success'] is False

    def test_bad_extension(self, client, admin_headers, storage):
        response = client.post(
            '/upload/registered',
            files={'registeredFile': ('list.csv', io.BytesIO(b'Name\nA\n'), 'text/csv')},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()['success'] is False
        assert storage.current_location('registered') is None

    def test_unparseable_file(self, client, admin_headers):
        response = client.post(
            '/upload/round1',
            files={'round1File': ('broken.xlsx', io.BytesIO(b'not a workbook'), XLSX_MIME)},
            headers=admin_headers
        )

        assert response.status_code == 500
        assert response.json() == {
            'success': False,
            'message': 'An error occurred while processing the file.'
        }
        assert client.get('/api/round1').json() == []


class TestParticipantQueries:
    """Test /api/{category}."""

    def test_example_round_trip(self, client, admin_headers, make_workbook):
        upload(client, 'registered', make_workbook([EXAMPLE_ROW]), headers=admin_headers)

        response = client.get('/api/registered')

        assert response.status_code == 200
        assert response.json() == [{'name': 'A', 'rollNo': '1', 'year': '2', 'section': 'CS'}]

    @pytest.mark.parametrize('category', ['registered', 'round1', 'winners'])
    def test_empty_before_upload(self, client, category):
        response = client.get(f'/api/{category}')

        assert response.status_code == 200
        assert response.json() == []

    def test_rows_in_file_order_with_defaults(self, client, admin_headers, make_workbook):
        rows = [
            {'Name': 'Zoe', 'Roll No': 7, 'Year': 3},
            {'Name': 'Adam', 'Section': 'EC'},
        ]
        path = make_workbook(rows, headers=['Name', 'Roll No', 'Year', 'Section'])
        upload(client, 'round1', path, headers=admin_headers)

        assert client.get('/api/round1').json() == [
            {'name': 'Zoe', 'rollNo': '7', 'year': '3', 'section': 'N/A'},
            {'name': 'Adam', 'rollNo': 'N/A', 'year': 'N/A', 'section': 'EC'},
        ]

    def test_missing_column_defaults(self, client, admin_headers, make_workbook):
        path = make_workbook([{'Name': 'Solo'}])
        upload(client, 'winners', path, headers=admin_headers)

        assert client.get('/api/winners').json() == [
            {'name': 'Solo', 'rollNo': 'N/A', 'year': 'N/A', 'section': 'N/A'}
        ]

    def test_second_upload_replaces_first(self, client, admin_headers, make_workbook):
        first = make_workbook([{'Name': 'old-1'}, {'Name': 'old-2'}])
        second = make_workbook([{'Name': 'new-1'}])

        upload(client, 'winners', first, headers=admin_headers)
        response = upload(client, 'winners', second, headers=admin_headers)

        assert response.json()['count'] == 1
        assert [r['name'] for r in client.get('/api/winners').json()] == ['new-1']

    def test_categories_are_independent(self, client, admin_headers, make_workbook):
        upload(client, 'registered', make_workbook([{'Name': 'reg'}]), headers=admin_headers)

        assert [r['name'] for r in client.get('/api/registered').json()] == ['reg']
        assert client.get('/api/round1').json() == []
        assert client.get('/api/winners').json() == []

    def test_unknown_category(self, client):
        response = client.get('/api/finals')

        assert response.status_code == 422
        assert response.json() == {'success': False, 'message': 'Invalid request'}


class TestPagesAndHealth:
    """Test front-end page routes and the health endpoint."""

    def test_page_served_from_public_dir(self, client, tmp_path, monkeypatch):
        public = tmp_path / 'public'
        public.mkdir()
        (public / 'admin-dashboard.html').write_text('<h1>Dashboard</h1>')
        monkeypatch.setattr(settings, 'PUBLIC_DIR', str(public))

        response = client.get('/admin/dashboard')

        assert response.status_code == 200
        assert 'Dashboard' in response.text
        assert response.headers['content-type'].startswith('text/html')

    def test_missing_page(self, client, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, 'PUBLIC_DIR', str(tmp_path / 'nowhere'))

        response = client.get('/rounds')

        assert response.status_code == 404
        assert response.json()['success'] is False

    def test_health(self, client, admin_headers, make_workbook):
        upload(client, 'round1', make_workbook([EXAMPLE_ROW]), headers=admin_headers)

        body = client.get('/health').json()

        assert body['status'] == 'healthy'
        assert body['session_backend'] == settings.SESSION_BACKEND
        assert body['uploads'] == {'registered': False, 'round1': True, 'winners': False}
