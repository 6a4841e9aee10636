#!/usr/bin/env python3

from typing import Any, Dict, List, Optional

import requests

from .errors import AuthError, FetchError, PublishError


# POEditor response code for an invalid API token
INVALID_TOKEN_CODES = {'4011'}


class ProviderError(Exception):
    """Internal signal for a failed POEditor call, translated by callers"""


class POEditorClient:
    """Handles the POEditor v2 API calls used by the sync workflow"""

    def __init__(self, config, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

        # Statistics
        self.api_calls = 0
        self.downloaded_bytes = 0

    def _credentials(self) -> Dict[str, str]:
        return {'api_token': self.config.api_token, 'id': self.config.project_id}

    def call_api(self, endpoint: str, data: Optional[Dict[str, str]] = None,
                 timeout: Optional[float] = None) -> Dict[str, Any]:
        """POST a form-encoded request and return the `result` object"""
        url = f"{self.config.api_url}/{endpoint}"
        payload = self._credentials()
        payload.update(data or {})

        try:
            response = self.session.post(url, data=payload, timeout=timeout or self.config.request_timeout)
        except requests.RequestException as e:
            raise ProviderError(f"request to {endpoint} failed: {e}") from e
        finally:
            self.api_calls += 1

        if response.status_code in (401, 403):
            raise AuthError(f"POEditor rejected the credentials (HTTP {response.status_code})")
        if not 200 <= response.status_code < 300:
            raise ProviderError(f"{endpoint} returned HTTP {response.status_code}: {response.text[:200]}")

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderError(f"{endpoint} returned a non-JSON body") from e
        if not isinstance(body, dict):
            raise ProviderError(f"{endpoint} returned an unexpected body")

        status = body.get('response')
        if isinstance(status, dict) and status.get('status') == 'fail':
            code = str(status.get('code', ''))
            message = status.get('message', 'unknown error')
            if code in INVALID_TOKEN_CODES:
                raise AuthError(f"POEditor rejected the credentials: {message}")
            raise ProviderError(f"{endpoint} failed with code {code}: {message}")

        result = body.get('result')
        if not isinstance(result, dict):
            raise ProviderError(f"{endpoint} response has no result object")
        return result

    def list_languages(self, timeout: Optional[float] = None) -> List[str]:
        """Return the language codes of the project, in provider order"""
        try:
            result = self.call_api('languages/list', timeout=timeout)
        except ProviderError as e:
            raise FetchError(f"Could not list languages: {e}") from e

        languages = result.get('languages')
        if not isinstance(languages, list):
            raise FetchError("Could not list languages: result.languages is missing")

        codes = []
        for entry in languages:
            code = entry.get('code') if isinstance(entry, dict) else None
            if not isinstance(code, str):
                raise FetchError(f"Could not list languages: malformed entry {entry!r}")
            codes.append(code)
        return codes

    def export_url(self, language: str, timeout: Optional[float] = None) -> str:
        """Request an export of one language and return its download URL"""
        try:
            result = self.call_api(
                'projects/export',
                {'language': language, 'type': self.config.export_type},
                timeout=timeout
            )
        except ProviderError as e:
            raise PublishError(language, f"export failed: {e}") from e
        except AuthError as e:
            # Credentials were accepted by the language listing, so this only fails one language
            raise PublishError(language, f"export rejected: {e}") from e

        url = result.get('url')
        if not isinstance(url, str) or not url.startswith(('https://', 'http://')):
            raise PublishError(language, f"export returned no usable URL: {url!r}")
        return url

    def download(self, language: str, url: str, timeout: Optional[float] = None) -> bytes:
        """Fetch an exported file; the URL is single use and never cached"""
        try:
            response = self.session.get(url, timeout=timeout or self.config.request_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise PublishError(language, f"download failed: {e}") from e

        content = response.content
        self.downloaded_bytes += len(content)
        return content

    def get_statistics(self) -> Dict[str, int]:
        """Get API usage statistics"""
        return {
            "api_calls": self.api_calls,
            "downloaded_bytes": self.downloaded_bytes
        }
