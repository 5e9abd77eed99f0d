"""
REST client for the NeonCalc API
Talks to api.py over HTTP with the same surface as ComputeService
"""
import logging
import time

import requests

import config
from errors import RemoteRejected, RemoteUnavailable

logger = logging.getLogger(__name__)


class RemoteComputeClient:
    def __init__(self, base_url=config.API_BASE_URL, timeout=config.API_TIMEOUT, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise RemoteUnavailable(f"{method} {url} failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            raise RemoteUnavailable(f"{method} {url} returned a non-JSON body "
                                    f"(HTTP {response.status_code})") from None

        if not isinstance(body, dict) or not body.get('success'):
            message = body.get('error', 'unknown error') if isinstance(body, dict) else 'unknown error'
            if 400 <= response.status_code < 500:
                raise RemoteRejected(message, response.status_code)
            raise RemoteUnavailable(f"{method} {url}: {message} (HTTP {response.status_code})")
        return body

    def _compute(self, operation, x, y):
        body = self._request("POST", f"/api/{operation}", json={'x': x, 'y': y})
        data = body.get('data')
        if not isinstance(data, dict) or 'result' not in data:
            raise RemoteUnavailable(f"Malformed {operation} response: {body!r}")
        try:
            result = int(data['result'])
        except (TypeError, ValueError):
            raise RemoteUnavailable(f"Non-integer {operation} result: {data['result']!r}") from None
        return {'result': result, 'expression': data.get('expression', '')}

    def add(self, x, y):
        return self._compute("add", x, y)

    def subtract(self, x, y):
        return self._compute("subtract", x, y)

    def multiply(self, x, y):
        return self._compute("multiply", x, y)

    def divide(self, x, y):
        return self._compute("divide", x, y)

    def get_history(self, days=None):
        """(expression, result) pairs, newest first"""
        params = {'days': days} if days is not None else None
        body = self._request("GET", "/api/history", params=params)
        return [(item['expression'], item['result']) for item in body.get('data', [])]

    def clear_history(self):
        self._request("DELETE", "/api/history")

    def ping(self):
        """True if the API answers its health check"""
        try:
            self._request("GET", "/api/health")
        except RemoteUnavailable as e:
            logger.debug("Health check failed: %s", e)
            return False
        return True

    def wait_until_available(self, timeout=config.API_STARTUP_WAIT, interval=0.25):
        """Poll the health check until it succeeds or `timeout` seconds pass"""
        deadline = time.monotonic() + timeout
        while True:
            if self.ping():
                return True
            if time.monotonic() >= deadline:
                return False
            time.sleep(interval)
