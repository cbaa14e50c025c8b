import requests
from typing import Callable

from linkharvest.domain.http_response import HttpResponse
from linkharvest.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Requires http_client callable for dependency injection.
    This enables easy testing without patching and allows swapping HTTP libraries.
    Whether TLS certificates are verified is decided by the caller through `verify`.

    Responses are streamed: the body is only downloaded when the Content-Type
    says it is HTML (or says nothing). Other bodies come back empty.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: float = 10, verify: bool = True):
        self.user_agent = user_agent
        self.timeout = timeout
        self.verify = verify
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """Fetch URL and return response with status code, body text, and Content-Type."""
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout, verify=self.verify, stream=True)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        try:
            # Extract Content-Type if response has headers; let real exceptions bubble up.
            ct = None
            if hasattr(resp, 'headers'):
                ct = resp.headers.get('Content-Type')

            response = HttpResponse(resp.status_code, "", ct)
            if response.is_html:
                try:
                    response = response._replace(text=resp.text)
                except requests.exceptions.RequestException as e:
                    raise HttpFetchError(url, e) from e
            return response
        finally:
            resp.close()
