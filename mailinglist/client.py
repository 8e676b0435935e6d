"""
Mailing List API Client
=======================

Thin client for the JSON API over requests.

Usage:
    from mailinglist.client import MailingListClient

    client = MailingListClient("http://localhost:8080")
    client.create_email("someone@example.com")
    page = client.get_email_batch(page=1, count=50)
"""

import requests

from .core.models import EmailEntry

DEFAULT_TIMEOUT = 15


class MailingListAPIError(Exception):
    """Non-2xx answer from the server"""

    def __init__(self, status_code, message=''):
        super().__init__(f"{status_code}: {message}" if message else str(status_code))
        self.status_code = status_code
        self.message = message


class MailingListClient:

    def __init__(self, base_url, timeout=DEFAULT_TIMEOUT, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _call(self, method, path, payload=None):
        resp = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=payload,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )

        if not 200 <= resp.status_code < 300:
            message = ''
            try:
                message = (resp.json() or {}).get('Err', '')
            except ValueError:
                pass  # 405 and serialization failures carry no body
            raise MailingListAPIError(resp.status_code, message)

        return resp.json()

    @staticmethod
    def _entry(data):
        return EmailEntry.from_json(data) if data is not None else None

    def create_email(self, email):
        return self._entry(self._call('POST', '/email/create', {'Email': email}))

    def get_email(self, email):
        """Returns None when the address is not registered"""
        return self._entry(self._call('GET', '/email/get', {'Email': email}))

    def get_email_batch(self, page, count):
        data = self._call('GET', '/email/get_batch', {'Page': page, 'Count': count})
        return [EmailEntry.from_json(item) for item in data or []]

    def update_email(self, entry):
        return self._entry(self._call('PUT', '/email/update', entry.to_json()))

    def delete_email(self, email):
        """Opt the address out; returns the record after the change"""
        return self._entry(self._call('POST', '/email/delete', {'Email': email}))

    def health(self):
        resp = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        return resp.status_code, resp.json()
