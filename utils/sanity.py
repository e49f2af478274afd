"""
Sanity Module - Read client for a hosted Sanity dataset
Used by the import migration to pull documents over the HTTP query API
"""

import json
import requests


class ContentStoreError(Exception):
    """Raised when the content store cannot be queried"""


class SanityClient:
    """Minimal GROQ query client for the Sanity HTTP API"""

    def __init__(self, project_id, dataset, api_version='2024-10-28', token=None,
                 use_cdn=False, timeout=10, session=None):
        if not project_id or not dataset:
            raise ValueError('project_id and dataset are required')
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version.lstrip('v')
        self.token = token
        self.use_cdn = use_cdn
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config):
        """Build a client from SANITY_* settings, or None when they are missing"""
        project_id = config.get('SANITY_PROJECT_ID')
        dataset = config.get('SANITY_DATASET')
        if not (project_id and dataset):
            return None
        return cls(project_id, dataset,
                   api_version=config.get('SANITY_API_VERSION') or '2024-10-28',
                   token=config.get('SANITY_API_READ_TOKEN'))

    @property
    def base_url(self):
        host = 'apicdn.sanity.io' if self.use_cdn else 'api.sanity.io'
        return f"https://{self.project_id}.{host}/v{self.api_version}/data/query/{self.dataset}"

    def fetch(self, query, params=None):
        """
        Run a GROQ query and return its result

        Args:
            query (str): GROQ query
            params (dict, optional): Query parameters, sent JSON-encoded as $name

        Returns:
            The 'result' member of the response
        """
        query_params = {'query': query}
        for name, value in (params or {}).items():
            query_params[f'${name}'] = json.dumps(value)

        headers = {}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'

        try:
            response = self.session.get(self.base_url, params=query_params,
                                        headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise ContentStoreError(f"Sanity request failed: {str(e)}") from e

        if response.status_code != 200:
            raise ContentStoreError(f"Sanity API error: {response.status_code} {response.text[:200]}")

        try:
            return response.json()['result']
        except (ValueError, KeyError) as e:
            raise ContentStoreError(f"Unexpected Sanity response: {str(e)}") from e


DOCUMENT_TYPES = ('portfolioProject', 'technology', 'projectCategory', 'post', 'author')


def check_connection(client):
    """Count documents per type; raises ContentStoreError if the dataset is unreachable"""
    return {doc_type: client.fetch('count(*[_type == $type])', {'type': doc_type})
            for doc_type in DOCUMENT_TYPES}


__all__ = [
    'ContentStoreError',
    'SanityClient',
    'DOCUMENT_TYPES',
    'check_connection'
]
