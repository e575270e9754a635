from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests import Response

from ..errors import HttpBadRequest, HttpError, HttpNotFound, TransportFailure


logger = logging.getLogger(__name__)


@dataclass
class RequestConfig:
    # None waits indefinitely
    timeout: Optional[float] = None


class HttpProvider:
    """Base class for providers issuing a single HTTP request per call.

    There are no retries: a failed request surfaces as one of the
    ``ProviderError`` subclasses and the caller decides what to do.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        status = response.status_code
        if status == 400:
            raise HttpBadRequest()
        if status == 404:
            raise HttpNotFound()
        if status >= 400:
            raise HttpError(status)
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise TransportFailure("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise TransportFailure("request failed") from exc
        return self._handle_response(response)


__all__ = ["HttpProvider", "RequestConfig"]
