#!/usr/bin/env python3
"""
Participants CLI - Dual Mode

This script can operate in two modes:
1. Direct mode (default): reads and writes the uploads directory via services
2. API mode: makes HTTP requests to the FastAPI backend

Usage:
    # Direct mode (uses services directly)
    python scripts/participants_cli.py upload --category registered --file registered.xlsx
    python scripts/participants_cli.py list --category registered

    # API mode (uses FastAPI backend, needs the admin password for uploads)
    python scripts/participants_cli.py upload -c winners -f winners.xlsx --api-url http://localhost:3000 -p secret
    python scripts/participants_cli.py list -c winners --api-url http://localhost:3000

    # Row count of a local file
    python scripts/participants_cli.py count --file round1.xlsx
"""

import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import json
import logging
from typing import Optional

import click
from dotenv import load_dotenv
import requests

from backend.models.participant import UploadCategory
from services.exceptions import ParticipantsError
from services.participant_service import ParticipantService
from services.spreadsheet_service import SpreadsheetReader
from services.storage_service import StorageService

# Load environment variables
load_dotenv()

# Configure logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FILE = os.getenv('LOG_FILE', 'cli.log')

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(LOG_FILE),
        logging.StreamHandler(sys.stderr)
    ]
)

logger = logging.getLogger('participants_cli')

# Configuration
UPLOAD_DIR = os.getenv('UPLOAD_DIR', 'uploads/')
SESSION_HEADER = os.getenv('SESSION_HEADER', 'X-Session-Id')
REQUEST_TIMEOUT = 30

XLSX_MIME = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

CATEGORY_CHOICE = click.Choice([c.value for c in UploadCategory])


@click.group()
def cli():
    """Competition participants CLI - Dual Mode Support"""


@cli.command('upload')
@click.option('--category', '-c', required=True, type=CATEGORY_CHOICE,
              help='Upload category')
@click.option('--file', '-f', 'file_path', required=True, type=click.Path(exists=True, dir_okay=False),
              help='Path to Excel file to upload')
@click.option('--password', '-p', envvar='ADMIN_PASSWORD',
              help='Admin password (API mode only)')
@click.option('--api-url', envvar='API_URL', help='FastAPI backend URL (enables API mode)')
def upload_cmd(category: str, file_path: str, password: Optional[str], api_url: Optional[str]):
    """Upload a spreadsheet as the current file of a category."""

    if api_url:
        click.echo(f"🌐 API Mode: Using backend at {api_url}")
        if not password:
            raise click.UsageError("--password (or ADMIN_PASSWORD) is required in API mode")
        upload_via_api(api_url, password, UploadCategory(category), file_path)
    else:
        click.echo("💾 Direct Mode: Using local uploads directory")
        upload_direct(UploadCategory(category), file_path)


@cli.command('list')
@click.option('--category', '-c', required=True, type=CATEGORY_CHOICE,
              help='Category to list')
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON instead of a table')
@click.option('--api-url', envvar='API_URL', help='FastAPI backend URL (enables API mode)')
def list_cmd(category: str, as_json: bool, api_url: Optional[str]):
    """List participants of a category."""

    if api_url:
        records = list_via_api(api_url, UploadCategory(category))
    else:
        records = list_direct(UploadCategory(category))

    if as_json:
        click.echo(json.dumps(records, indent=2))
        return

    if not records:
        click.echo(f"No participants in '{category}'")
        return

    click.echo(f"{'Name':<30} {'Roll No':<15} {'Year':<6} {'Section':<10}")
    click.echo("-" * 64)
    for record in records:
        click.echo(f"{record['name']:<30} {record['rollNo']:<15} {record['year']:<6} {record['section']:<10}")
    click.echo(f"\n{len(records)} participant(s)")


@cli.command('count')
@click.option('--file', '-f', 'file_path', required=True, type=click.Path(exists=True, dir_okay=False),
              help='Path to Excel file')
def count_cmd(file_path: str):
    """Count data rows in a spreadsheet without uploading it."""
    try:
        count = SpreadsheetReader().count_rows(file_path)
    except Exception as e:
        logger.error(f"Could not read {file_path}: {e}", exc_info=True)
        click.echo(f"✗ Could not read {file_path}: {e}", err=True)
        sys.exit(1)

    click.echo(f"{count} record(s) in {file_path}")


@cli.command('clear')
@click.option('--category', '-c', required=True, type=CATEGORY_CHOICE,
              help='Category to clear')
@click.confirmation_option(prompt='Remove the current upload for this category?')
def clear_cmd(category: str):
    """Remove the current upload of a category (direct mode only)."""
    storage = StorageService(UPLOAD_DIR)

    if storage.delete(category):
        click.echo(f"✓ Cleared '{category}'")
    else:
        click.echo(f"ℹ️  Nothing uploaded for '{category}'")


# ============================================================================
# Direct Mode Implementation (Uses Services Directly)
# ============================================================================

def upload_direct(category: UploadCategory, file_path: str):
    """Store file in the local uploads directory."""
    click.echo(f"\n📁 Uploading: {file_path} -> {category.value}")

    storage = StorageService(UPLOAD_DIR)
    service = ParticipantService(storage)

    try:
        with open(file_path, 'rb') as f:
            stored_path = storage.store(category, f, Path(file_path).name)
        count = service.count_records(stored_path)
    except ParticipantsError as e:
        click.echo(f"✗ Upload rejected: {e.message}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Upload failed: {e}", exc_info=True)
        click.echo(f"✗ Upload failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Stored as {stored_path}")
    click.echo(f"Records: {count}")


def list_direct(category: UploadCategory) -> list:
    """Read participants from the local uploads directory."""
    service = ParticipantService(StorageService(UPLOAD_DIR))
    return [
        {
            'name': r.name,
            'rollNo': r.roll_no,
            'year': r.year,
            'section': r.section,
        }
        for r in service.list_participants(category)
    ]


# ============================================================================
# API Mode Implementation (Uses FastAPI Backend)
# ============================================================================

def upload_via_api(api_url: str, password: str, category: UploadCategory, file_path: str):
    """Log in, upload the file, log out."""
    click.echo(f"\n📤 Uploading {file_path} to {api_url}/upload/{category.value}...")

    try:
        response = requests.post(
            f"{api_url}/admin/login",
            json={'password': password},
            timeout=REQUEST_TIMEOUT
        )
        if response.status_code != 200:
            click.echo(f"❌ Login failed ({response.status_code}): {response.text}", err=True)
            sys.exit(1)

        session_id = response.json()['sessionId']
        headers = {SESSION_HEADER: session_id}

        try:
            with open(file_path, 'rb') as f:
                files = {category.field_name: (Path(file_path).name, f, XLSX_MIME)}
                response = requests.post(
                    f"{api_url}/upload/{category.value}",
                    files=files,
                    headers=headers,
                    timeout=REQUEST_TIMEOUT
                )
        finally:
            requests.post(f"{api_url}/admin/logout", headers=headers, timeout=REQUEST_TIMEOUT)

        if response.status_code != 200:
            click.echo(f"❌ Upload failed ({response.status_code}): {response.text}", err=True)
            sys.exit(1)

        click.echo(f"✓ Upload successful. Records: {response.json()['count']}")

    except requests.exceptions.RequestException as e:
        click.echo(f"❌ Network error: {e}", err=True)
        sys.exit(1)


def list_via_api(api_url: str, category: UploadCategory) -> list:
    """Fetch participants from the backend."""
    try:
        response = requests.get(f"{api_url}/api/{category.value}", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        click.echo(f"❌ Network error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    cli()
