"""Pytest configuration and fixtures for integration tests.

Integration tests wire the real content store, metadata store, exporter and
publishing client together. Only the Confluence SDK object and Pandoc are
replaced by mocks, so no network access or pandoc binary is needed.
"""

from pathlib import Path
from typing import Dict, Any
from unittest.mock import MagicMock, Mock, patch

import pytest

from src.content_store.store import ContentStore
from src.exporter.exporter import ExporterFactory
from src.metadata_store.binding import BindingAccessor
from src.metadata_store.store import MetadataStore
from src.publishing_client.auth import Authenticator
from src.publishing_client.client import PublishingClient
from src.push.models import PushSettings
from src.push.orchestrator import PushOrchestrator


def page_payload(page_id: str, version: int, when: str) -> Dict[str, Any]:
    """Confluence content payload as returned by create/update calls."""
    return {
        'id': page_id,
        'type': 'page',
        'title': 'Intro',
        'version': {'number': version, 'when': when},
        'history': {'createdDate': '2024-01-03T00:00:00.000Z'},
        '_links': {
            'base': 'https://test.atlassian.net/wiki',
            'webui': f'/spaces/TEAM/pages/{page_id}',
        },
    }


def put_response(status_code: int, payload: Dict[str, Any] = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def credentials_env(monkeypatch, tmp_path):
    """Credentials in the environment; cwd moved so no stray .env is loaded."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('CONFLUENCE_URL', 'https://test.atlassian.net/wiki')
    monkeypatch.setenv('CONFLUENCE_USER', 'test@example.com')
    monkeypatch.setenv('CONFLUENCE_API_TOKEN', 'token123')


@pytest.fixture
def confluence():
    """Mocked atlassian Confluence instance used by PublishingClient."""
    with patch('src.publishing_client.client.Confluence') as confluence_cls:
        instance = MagicMock()
        instance.url = 'https://test.atlassian.net/wiki'
        instance.create_page.return_value = page_payload('98765', 1, '2024-01-03T00:00:00.000Z')
        confluence_cls.return_value = instance
        yield instance


@pytest.fixture
def content_dir(tmp_path) -> Path:
    path = tmp_path / 'docs'
    (path / 'guides').mkdir(parents=True)
    return path


@pytest.fixture
def converter():
    converter = Mock()
    converter.markdown_to_xhtml.return_value = '<p>Hello</p>'
    return converter


@pytest.fixture
def orchestrator(tmp_path, credentials_env, confluence, content_dir, converter):
    authenticator = Authenticator()
    creds = authenticator.read_credentials()
    content_store = ContentStore(str(content_dir))

    return PushOrchestrator(
        settings=PushSettings(creds.url, creds.user, creds.api_token, 'TEAM'),
        content_store=content_store,
        metadata=BindingAccessor(MetadataStore(str(tmp_path / 'state' / 'metadata.yaml'))),
        exporter_factory=ExporterFactory(content_store, str(tmp_path / 'state' / 'workspace'), converter),
        client=PublishingClient(authenticator),
    )


@pytest.fixture
def make_page():
    return page_payload


@pytest.fixture
def make_put_response():
    return put_response
