"""
Pytest configuration and fixtures for the participants backend tests.
"""

import os
import shutil
import tempfile
import pytest
import openpyxl
from pathlib import Path

# Keep test runs from writing logs and uploads into the working tree
os.environ.setdefault('LOG_FILE', os.devnull)
if 'UPLOAD_DIR' not in os.environ:
    SESSION_UPLOAD_DIR = tempfile.mkdtemp(prefix='participants-uploads-')
    os.environ['UPLOAD_DIR'] = SESSION_UPLOAD_DIR
else:
    SESSION_UPLOAD_DIR = None

from fastapi.testclient import TestClient

from api.dependencies import get_session_store, get_storage_service
from api.main import app
from backend.models.participant import COLUMN_MAP
from services.participant_service import ParticipantService
from services.session_service import InMemorySessionStore, StaticPasswordVerifier
from services.storage_service import StorageService

ADMIN_PASSWORD = 'test-password'
XLSX_MIME = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


@pytest.fixture(scope='session', autouse=True)
def remove_session_upload_dir():
    """Delete the app-level uploads directory created for this test run."""
    yield
    if SESSION_UPLOAD_DIR is not None:
        shutil.rmtree(SESSION_UPLOAD_DIR, ignore_errors=True)


@pytest.fixture
def upload_dir(tmp_path):
    """Uploads directory path (not created up front)."""
    return tmp_path / 'uploads'


@pytest.fixture
def storage(upload_dir):
    return StorageService(str(upload_dir), max_file_size_mb=5)


@pytest.fixture
def participant_service(storage):
    return ParticipantService(storage)


@pytest.fixture
def session_store():
    return InMemorySessionStore(StaticPasswordVerifier(ADMIN_PASSWORD))


@pytest.fixture
def make_workbook(tmp_path):
    """
    Factory writing an .xlsx file from a list of row dicts.

    Headers default to the keys of the first row, or the standard columns
    for an empty list.
    """
    counter = {'n': 0}

    def _make(rows, headers=None, name=None):
        counter['n'] += 1
        wb = openpyxl.Workbook()
        ws = wb.active

        if headers is None:
            headers = list(rows[0].keys()) if rows else list(COLUMN_MAP)
        ws.append(headers)
        for row in rows:
            ws.append([row.get(h) for h in headers])

        path = tmp_path / (name or f"sheet_{counter['n']}.xlsx")
        wb.save(path)
        return path

    return _make


@pytest.fixture
def client(storage, session_store):
    """Test client wired to temporary storage and an in-memory session store."""
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_session_store] = lambda: session_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    """Headers carrying a freshly issued admin session."""
    response = client.post('/admin/login', json={'password': ADMIN_PASSWORD})
    assert response.status_code == 200
    return {'X-Session-Id': response.json()['sessionId']}


def upload(client, category, path: Path, headers=None, field=None):
    """POST a workbook to an upload endpoint."""
    with open(path, 'rb') as f:
        return client.post(
            f'/upload/{category}',
            files={field or f'{category}File': (path.name, f, XLSX_MIME)},
            headers=headers or {}
        )
