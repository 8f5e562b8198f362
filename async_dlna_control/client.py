# -*- coding: utf-8 -*-
"""HTTP transport capability used by the control client."""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, Mapping, Optional

from async_dlna_control.cancel import CancelToken


class UpnpResponse(ABC):
    """
    Response to a HTTP request, valid within the requester's context.

    The body is read lazily through async_read().
    """

    def __init__(self, status: int, headers: Mapping[str, str]) -> None:
        """Initialize."""
        self.status = status
        self.headers = headers

    @abstractmethod
    async def async_read(self) -> bytes:
        """Read the complete response body."""

    def __repr__(self) -> str:
        """To repr."""
        return f"<{type(self).__name__}(status={self.status})>"


class UpnpRequester(ABC):
    """
    Abstract base class used for performing async HTTP requests.

    Implement method async_http_request() in your concrete class.
    Implementations must be safe for concurrent use.
    """

    # pylint: disable=too-few-public-methods

    @abstractmethod
    def async_http_request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
        content_type: Optional[str] = None,
        cancel_token: Optional[CancelToken] = None,
        log_traffic: bool = True,
    ) -> AsyncContextManager[UpnpResponse]:
        """
        Do a HTTP request.

        Use as: ``async with requester.async_http_request(...) as response:``.
        The response, and any connection it holds, is released when the
        context is left.

        :param method HTTP Method
        :param url URL to call
        :param headers Headers to send
        :param body Body to send
        :param content_type Content-Type of body
        :param cancel_token Token to observe while waiting for I/O
        :param log_traffic Log request and response to the traffic logger

        :return context manager yielding the UpnpResponse
        :raise UpnpCommunicationError (or subclass): request failed
        """
        # pylint: disable=too-many-arguments
