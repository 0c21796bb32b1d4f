import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from ci_dashboard.ci.exceptions import (
    CIClientGeneralError,
    CIObjectNotFoundError,
    CIResponseParseError,
    CIServer5xxCodeError,
    CIServerUnreachableError,
    CIUnauthorizedError,
)
from ci_dashboard.config import get_config
from ci_dashboard.metrics import (
    CI_API_CALL_COUNTER,
    CI_API_CALL_DURATION,
    CI_API_ERROR_COUNTER,
    inc_counter,
)

log = logging.getLogger(__name__)


def _response_data(res: httpx.Response) -> Any:
    try:
        return res.json()
    except ValueError:
        return res.text


class CIBaseAdapter(object):
    service: str = None
    verify_ssl = None

    def __init__(self, timeouts: List[int] = None, token: str = None, verify_ssl=None):
        self._timeouts = timeouts or [
            get_config("setup", "http", "timeouts", "connect", default=10),
            get_config("setup", "http", "timeouts", "receive", default=30),
        ]
        self._token = token
        self.verify_ssl = verify_ssl

    def __repr__(self):
        return "<%s api_url=%s>" % (self.service, self.api_url)

    @property
    def api_url(self) -> str:
        raise NotImplementedError()

    @property
    def token(self) -> Optional[str]:
        return self._token

    def get_client(self, timeouts: List[int] = []) -> httpx.AsyncClient:
        if timeouts:
            timeout = httpx.Timeout(timeouts[1], connect=timeouts[0])
        else:
            timeout = httpx.Timeout(self._timeouts[1], connect=self._timeouts[0])
        return httpx.AsyncClient(
            verify=self.verify_ssl if self.verify_ssl is not None else True,
            timeout=timeout,
            follow_redirects=True,
        )

    def get_auth_headers(self) -> Dict[str, str]:
        return {}

    def _error_message(self, res: httpx.Response) -> str:
        return f"{self.service} API: {res.status_code}"

    def count_endpoint(self, endpoint: str) -> None:
        inc_counter(
            CI_API_CALL_COUNTER, labels=dict(provider=self.service, endpoint=endpoint)
        )

    def _count_error(self, endpoint: str, error: str) -> None:
        inc_counter(
            CI_API_ERROR_COUNTER,
            labels=dict(provider=self.service, endpoint=endpoint, error=error),
        )

    async def make_http_call(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        *,
        endpoint: str,
        headers: Dict[str, str] = None,
        **args,
    ) -> httpx.Response:
        """Makes a single http request and maps failures onto the CIError hierarchy

        Args:
            client (httpx.AsyncClient): the client to send the request with
            method (str): the http method
            url (str): either a full url or a path relative to `self.api_url`
            endpoint (str): name of the endpoint, used for metrics and logs
            headers (dict, optional): extra headers to send
            **args: query parameters

        Raises:
            CIServerUnreachableError: on network errors and timeouts
            CIServer5xxCodeError: if the provider answered with a 5xx
            CIObjectNotFoundError: on 404
            CIUnauthorizedError: on 401 and 403
            CIClientGeneralError: on any other status >= 400
        """
        _headers = {
            "Accept": "application/json",
            "User-Agent": os.getenv("USER_AGENT", "Default"),
        }
        method = (method or "GET").upper()
        if url.startswith("/"):
            url = self.api_url + url
        # artifacts are downloaded from other hosts that must not see our token
        if url.startswith(self.api_url):
            _headers.update(self.get_auth_headers())
        _headers.update(headers or {})
        log_dict = dict(
            event="api", provider=self.service, endpoint=endpoint, method=method
        )

        self.count_endpoint(endpoint)
        try:
            with CI_API_CALL_DURATION.labels(provider=self.service).time():
                res = await client.request(
                    method, url, params=args or None, headers=_headers
                )
        except (httpx.TimeoutException, httpx.NetworkError):
            self._count_error(endpoint, "unreachable")
            log.warning("%s was not able to be reached", self.service, extra=log_dict)
            raise CIServerUnreachableError(f"{self.service} was not able to be reached.")

        logged_body = None
        if res.status_code >= 300 and res.text is not None:
            logged_body = res.text
        log.log(
            logging.WARNING if res.status_code >= 300 else logging.INFO,
            "%s HTTP %s",
            self.service,
            res.status_code,
            extra=dict(body=logged_body, url=url, **log_dict),
        )

        if res.status_code >= 500:
            self._count_error(endpoint, "5xx")
            raise CIServer5xxCodeError(f"{self.service} is having 5xx issues")
        elif res.status_code == 404:
            self._count_error(endpoint, "not_found")
            raise CIObjectNotFoundError(
                _response_data(res), self._error_message(res)
            )
        elif res.status_code in (401, 403):
            self._count_error(endpoint, "unauthorized")
            raise CIUnauthorizedError(
                res.status_code,
                _response_data(res),
                self._error_message(res),
            )
        elif res.status_code >= 400:
            self._count_error(endpoint, "client_error")
            raise CIClientGeneralError(
                res.status_code,
                _response_data(res),
                self._error_message(res),
            )
        return res

    def _parse_response(self, res: httpx.Response, endpoint: str) -> Any:
        if res.status_code == 204:
            return None
        try:
            return res.json()
        except ValueError:
            self._count_error(endpoint, "parse")
            raise CIResponseParseError(
                f"{self.service} API: {endpoint} did not return valid json"
            )

    def _unexpected_response(self, endpoint: str, detail: str) -> CIResponseParseError:
        """For json bodies that don't have the shape the endpoint documents"""
        self._count_error(endpoint, "parse")
        log.warning(
            "%s returned an unexpected response",
            self.service,
            extra=dict(provider=self.service, endpoint=endpoint, detail=detail),
        )
        return CIResponseParseError(f"{self.service} API: {endpoint} {detail}")

    async def api(self, method: str, url: str, *, endpoint: str, **args) -> Any:
        """
        Makes a single http request to the provider and returns the parsed response
        """
        async with self.get_client() as client:
            res = await self.make_http_call(
                client, method, url, endpoint=endpoint, **args
            )
            return self._parse_response(res, endpoint)

    async def download_json(self, url: str, *, endpoint: str = "download") -> Any:
        """Downloads an artifact from an absolute url and parses it as json"""
        return await self.api("get", url, endpoint=endpoint)
