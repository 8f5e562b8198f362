# -*- coding: utf-8 -*-
"""Exceptions raised by async_dlna_control."""

import asyncio
from typing import Any, Optional
from xml.etree import ElementTree as ET

import aiohttp

# pylint: disable=too-many-ancestors


class UpnpError(Exception):
    """UpnpError."""


class UpnpValueError(UpnpError, ValueError):
    """Invalid argument passed by the caller."""

    def __init__(self, name: str, value: Any) -> None:
        """Initialize."""
        super().__init__(f"Invalid value for {name}: '{value}'")
        self.name = name
        self.value = value


class UpnpXmlParseError(UpnpError, ET.ParseError):
    """UPnP response is not valid XML, or uses constructs refused by the parser."""

    def __init__(self, orig_err: Exception) -> None:
        """Initialize from original error, to match it."""
        super().__init__(str(orig_err) or type(orig_err).__name__)
        self.code = getattr(orig_err, "code", None)
        self.position = getattr(orig_err, "position", None)


class UpnpCommunicationError(UpnpError, aiohttp.ClientError):
    """Error occurred while communicating with the UPnP device."""


class UpnpResponseError(UpnpCommunicationError):
    """HTTP error code returned by the UPnP device."""

    def __init__(
        self,
        status: int,
        headers: Optional[aiohttp.typedefs.LooseHeaders] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize."""
        super().__init__(message or f"Did not receive HTTP 2xx but {status}")
        self.status = status
        self.headers = headers


class UpnpClientResponseError(aiohttp.ClientResponseError, UpnpResponseError):
    """HTTP response error with more details from aiohttp."""


class UpnpConnectionError(UpnpCommunicationError, aiohttp.ClientConnectionError):
    """Error in the underlying connection to the UPnP device.

    This could indicate that the device is offline.
    """


class UpnpConnectionTimeoutError(
    UpnpConnectionError, aiohttp.ServerTimeoutError, asyncio.TimeoutError
):
    """Timeout while communicating with the device."""


class UpnpCancelledError(UpnpCommunicationError):
    """Request was cancelled through its CancelToken."""
