# -*- coding: utf-8 -*-
"""aiohttp requester module."""

import asyncio
import logging
import urllib.parse
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Mapping, Optional

import aiohttp
import async_timeout

from async_dlna_control.cancel import CancelToken, async_wait_cancellable
from async_dlna_control.client import UpnpRequester, UpnpResponse
from async_dlna_control.const import HEADER_CONTENT_TYPE
from async_dlna_control.exceptions import (
    UpnpCancelledError,
    UpnpClientResponseError,
    UpnpCommunicationError,
    UpnpConnectionError,
    UpnpConnectionTimeoutError,
    UpnpResponseError,
)

_LOGGER = logging.getLogger(__name__)
_LOGGER_TRAFFIC_UPNP = logging.getLogger("async_dlna_control.traffic.upnp")


def _fixed_host_header(url: str) -> Dict[str, str]:
    """Strip the zone id of an IPv6 link-local address from the Host header."""
    parsed = urllib.parse.urlsplit(url)
    hostname = parsed.hostname
    if hostname is None or "%" not in hostname:
        return {}

    host = "[" + hostname.split("%")[0] + "]"
    if parsed.port:
        host = f"{host}:{parsed.port}"
    return {"Host": host}


class AiohttpResponse(UpnpResponse):
    """UpnpResponse backed by an aiohttp.ClientResponse."""

    def __init__(
        self,
        response: aiohttp.ClientResponse,
        timeout: float,
        cancel_token: Optional[CancelToken],
        log_traffic: bool,
    ) -> None:
        """Initialize."""
        super().__init__(response.status, response.headers)
        self._response = response
        self._timeout = timeout
        self._cancel_token = cancel_token
        self._log_traffic = log_traffic

    async def async_read(self) -> bytes:
        """Read the complete response body."""
        try:
            async with async_timeout.timeout(self._timeout):
                body = await async_wait_cancellable(
                    self._response.read(), self._cancel_token
                )
        except asyncio.TimeoutError as err:
            raise UpnpConnectionTimeoutError(str(err)) from err
        except aiohttp.ClientConnectionError as err:
            raise UpnpConnectionError(str(err)) from err
        except aiohttp.ClientError as err:
            if isinstance(err, UpnpCommunicationError):
                raise
            raise UpnpCommunicationError(str(err)) from err

        if self._log_traffic:
            _LOGGER_TRAFFIC_UPNP.debug("Got response body:\n%s", body)

        return body


@asynccontextmanager
async def _async_session_request(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: Optional[str],
    timeout: float,
    cancel_token: Optional[CancelToken],
    log_traffic: bool,
) -> AsyncIterator[UpnpResponse]:
    """Do a HTTP request on session, release the response afterwards."""
    # pylint: disable=too-many-arguments
    if cancel_token is not None:
        cancel_token.raise_if_cancelled()

    if log_traffic:
        _LOGGER_TRAFFIC_UPNP.debug(
            "Sending request:\n%s %s\n%s\n%s\n",
            method,
            url,
            "\n".join([key + ": " + value for key, value in headers.items()]),
            body or "",
        )

    async def _async_request() -> aiohttp.ClientResponse:
        return await session.request(method, url, headers=headers, data=body)

    try:
        async with async_timeout.timeout(timeout):
            response = await async_wait_cancellable(_async_request(), cancel_token)
    except UpnpCancelledError:
        _LOGGER.debug("Request cancelled: %s %s", method, url)
        raise
    except asyncio.TimeoutError as err:
        raise UpnpConnectionTimeoutError(str(err)) from err
    except aiohttp.ClientConnectionError as err:
        raise UpnpConnectionError(str(err)) from err
    except aiohttp.ClientResponseError as err:
        raise UpnpClientResponseError(
            request_info=err.request_info,
            history=err.history,
            status=err.status,
            message=err.message,
            headers=err.headers,
        ) from err
    except aiohttp.ClientError as err:
        raise UpnpCommunicationError(str(err)) from err

    try:
        if log_traffic:
            _LOGGER_TRAFFIC_UPNP.debug(
                "Got response:\n%s\n%s\n",
                response.status,
                "\n".join(
                    [key + ": " + value for key, value in response.headers.items()]
                ),
            )

        if not 200 <= response.status < 300:
            _LOGGER.debug("Did not receive 2xx, but %s", response.status)
            raise UpnpResponseError(status=response.status, headers=response.headers)

        yield AiohttpResponse(response, timeout, cancel_token, log_traffic)
    finally:
        response.release()


class AiohttpRequester(UpnpRequester):
    """Standard AiohttpRequester, using a new session per request."""

    # pylint: disable=too-few-public-methods

    def __init__(
        self, timeout: float = 5, http_headers: Optional[Mapping[str, str]] = None
    ) -> None:
        """Initialize."""
        self._timeout = timeout
        self._http_headers = http_headers or {}

    @asynccontextmanager
    async def async_http_request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
        content_type: Optional[str] = None,
        cancel_token: Optional[CancelToken] = None,
        log_traffic: bool = True,
    ) -> AsyncIterator[UpnpResponse]:
        """Do a HTTP request."""
        # pylint: disable=too-many-arguments
        req_headers = _request_headers(
            self._http_headers, url, headers, content_type
        )
        async with aiohttp.ClientSession() as session:
            async with _async_session_request(
                session,
                method,
                url,
                req_headers,
                body,
                self._timeout,
                cancel_token,
                log_traffic,
            ) as response:
                yield response


class AiohttpSessionRequester(UpnpRequester):
    """
    Standard AiohttpSessionRequester.

    With pluggable session.
    """

    # pylint: disable=too-few-public-methods

    def __init__(
        self,
        session: aiohttp.ClientSession,
        with_sleep: bool = False,
        timeout: float = 5,
        http_headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize."""
        self._session = session
        self._with_sleep = with_sleep
        self._timeout = timeout
        self._http_headers = http_headers or {}

    @asynccontextmanager
    async def async_http_request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
        content_type: Optional[str] = None,
        cancel_token: Optional[CancelToken] = None,
        log_traffic: bool = True,
    ) -> AsyncIterator[UpnpResponse]:
        """Do a HTTP request."""
        # pylint: disable=too-many-arguments
        req_headers = _request_headers(
            self._http_headers, url, headers, content_type
        )

        if self._with_sleep:
            await asyncio.sleep(0)

        async with _async_session_request(
            self._session,
            method,
            url,
            req_headers,
            body,
            self._timeout,
            cancel_token,
            log_traffic,
        ) as response:
            yield response


def _request_headers(
    default_headers: Mapping[str, str],
    url: str,
    headers: Optional[Mapping[str, str]],
    content_type: Optional[str],
) -> Dict[str, str]:
    """Merge default and request headers."""
    headers = headers or {}
    host_header = {}
    if not any(key.lower() == "host" for key in headers):
        host_header = _fixed_host_header(url)

    req_headers = {**default_headers, **host_header, **headers}
    if content_type:
        req_headers[HEADER_CONTENT_TYPE] = content_type
    return req_headers
