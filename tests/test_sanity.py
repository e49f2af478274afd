"""
Sanity Client Tests
===================
Query encoding, error wrapping and the import mapping, with a mocked HTTP session.
"""
import json
from unittest import mock

import pytest
import requests

from migrations.import_from_sanity import fetch_documents
from models import PortfolioProject, Post
from migrations.seed_content import seed_content
from utils.sanity import ContentStoreError, SanityClient, check_connection


def make_response(status=200, payload=None, text=''):
    response = mock.Mock()
    response.status_code = status
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return mock.Mock(spec=requests.Session)


class TestSanityClient:
    """Tests for SanityClient"""

    def test_requires_project_and_dataset(self):
        with pytest.raises(ValueError):
            SanityClient('', 'production')

    def test_from_config_without_settings(self):
        assert SanityClient.from_config({'SANITY_PROJECT_ID': None, 'SANITY_DATASET': None}) is None

    def test_base_url(self):
        client = SanityClient('abc123', 'production', api_version='v2024-10-28')
        assert client.base_url == 'https://abc123.api.sanity.io/v2024-10-28/data/query/production'
        client.use_cdn = True
        assert client.base_url.startswith('https://abc123.apicdn.sanity.io/')

    def test_fetch_encodes_params(self, session):
        session.get.return_value = make_response(payload={'result': 4})
        client = SanityClient('abc123', 'production', token='secret', session=session)

        assert client.fetch('count(*[_type == $type])', {'type': 'post'}) == 4

        _, kwargs = session.get.call_args
        assert kwargs['params'] == {'query': 'count(*[_type == $type])', '$type': json.dumps('post')}
        assert kwargs['headers'] == {'Authorization': 'Bearer secret'}
        assert kwargs['timeout'] == 10

    def test_http_error(self, session):
        session.get.return_value = make_response(status=403, text='forbidden')
        client = SanityClient('abc123', 'production', session=session)
        with pytest.raises(ContentStoreError):
            client.fetch('*')

    def test_transport_error(self, session):
        session.get.side_effect = requests.ConnectionError('unreachable')
        client = SanityClient('abc123', 'production', session=session)
        with pytest.raises(ContentStoreError):
            client.fetch('*')

    def test_malformed_body(self, session):
        session.get.return_value = make_response(payload={'ms': 3})
        client = SanityClient('abc123', 'production', session=session)
        with pytest.raises(ContentStoreError):
            client.fetch('*')

    def test_check_connection(self, session):
        session.get.return_value = make_response(payload={'result': 2})
        client = SanityClient('abc123', 'production', session=session)
        counts = check_connection(client)
        assert set(counts) == {'portfolioProject', 'technology', 'projectCategory', 'post', 'author'}
        assert all(count == 2 for count in counts.values())


class FakeClient:
    """Returns canned documents keyed by the queried _type."""

    def __init__(self, documents):
        self.documents = documents

    def fetch(self, query, params=None):
        for doc_type, docs in self.documents.items():
            if f'_type == "{doc_type}"' in query:
                return docs
        return []


class TestImport:
    """Tests for fetching and upserting Sanity documents"""

    def test_references_resolved_by_id(self, app):
        client = FakeClient({
            'technology': [{'_id': 'tech-1', 'name': 'Python', 'slug': 'python'}],
            'author': [{'_id': 'author-1', 'firstName': 'Ada', 'lastName': 'L'}],
            'portfolioProject': [{
                '_id': 'proj-1', 'title': 'Pipeline', 'slug': 'pipeline', 'category': 'data',
                'shortDescription': 'ETL', 'completionDate': '2024-02-01',
                'technologyIds': ['tech-1', 'tech-missing'],
            }],
            'post': [{'_id': 'post-1', 'title': 'Hello', 'slug': 'hello', 'authorId': 'author-1',
                      'date': '2024-03-01T10:00:00Z'}],
        })

        data = fetch_documents(client)
        assert data['projects'][0]['technologies'] == ['Python']

        seed_content(data)
        project = PortfolioProject.query.filter_by(slug='pipeline').one()
        assert project.sanity_id == 'proj-1'
        assert [t.name for t in project.technologies] == ['Python']
        assert project.short_description == 'ETL'

        post = Post.query.filter_by(slug='hello').one()
        assert post.author.first_name == 'Ada'
