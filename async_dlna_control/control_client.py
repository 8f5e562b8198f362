# -*- coding: utf-8 -*-
"""UPnP control client module."""

import logging
from typing import Any, Callable, Mapping, Optional
from xml.etree import ElementTree as ET

import voluptuous as vol

from async_dlna_control.cancel import CancelToken
from async_dlna_control.client import UpnpRequester
from async_dlna_control.const import (
    CONTENT_TYPE_XML,
    DEFAULT_SUBSCRIPTION_TIMEOUT,
    FRIENDLY_NAME,
    HEADER_CONTENT_FEATURES,
    HEADER_FRIENDLY_NAME,
    HEADER_PRAGMA,
    HEADER_SOAP_ACTION,
    HEADER_USER_AGENT,
    NT_UPNP_EVENT,
    USER_AGENT,
    DeviceService,
)
from async_dlna_control.exceptions import UpnpValueError
from async_dlna_control.utils import (
    normalize_service_url,
    parse_xml_body,
    quote_soap_action,
)

_LOGGER = logging.getLogger(__name__)

NON_EMPTY_STR = vol.Schema(vol.All(str, vol.Length(min=1)))
PORT = vol.Schema(vol.All(int, vol.Range(min=1, max=65535)))
POSITIVE_INT = vol.Schema(vol.All(int, vol.Range(min=1)))


def _validate(name: str, validator: Callable[[Any], Any], value: Any) -> None:
    """Validate a caller supplied value."""
    if isinstance(value, bool):
        # bool is an int, but never a valid port or timeout
        raise UpnpValueError(name, value)

    try:
        validator(value)
    except vol.Invalid as err:
        raise UpnpValueError(name, value) from err


class UpnpControlClient:
    """
    Control a remote UPnP/DLNA device.

    Calls SOAP actions, subscribes to events and retrieves description
    documents, through the given UpnpRequester.
    """

    def __init__(self, requester: UpnpRequester) -> None:
        """Initialize."""
        self.requester = requester

    async def async_send_command(
        self,
        base_url: str,
        service: DeviceService,
        command: str,
        post_data: str,
        log_request: bool = True,
        header: Optional[str] = None,
    ) -> ET.Element:
        """
        Invoke SOAP action command on service.

        :param base_url: Root URL of the device
        :param service: Service to invoke command on
        :param command: Name of the action
        :param post_data: SOAP envelope to send
        :param log_request: Log request to the traffic logger
        :param header: Value for the contentFeatures.dlna.org header
        :return: Parsed response document
        :raise UpnpValueError: Invalid base_url, service or command
        :raise UpnpCommunicationError (or subclass): Error during request
        :raise UpnpXmlParseError: Response is not valid XML
        """
        # pylint: disable=too-many-arguments
        _validate("base_url", NON_EMPTY_STR, base_url)
        _validate("service.control_url", NON_EMPTY_STR, service.control_url)
        _validate("service.service_type", NON_EMPTY_STR, service.service_type)
        _validate("command", NON_EMPTY_STR, command)

        url = normalize_service_url(base_url, service.control_url)
        soap_action = quote_soap_action(f"{service.service_type}#{command}")
        headers = {
            HEADER_USER_AGENT: USER_AGENT,
            HEADER_SOAP_ACTION: soap_action,
            HEADER_PRAGMA: "no-cache",
            HEADER_FRIENDLY_NAME: FRIENDLY_NAME,
        }
        if header:
            headers[HEADER_CONTENT_FEATURES] = header

        _LOGGER.debug("Sending command %s to: %s", soap_action, url)
        async with self.requester.async_http_request(
            "POST",
            url,
            headers,
            post_data,
            content_type=CONTENT_TYPE_XML,
            log_traffic=log_request,
        ) as response:
            body = await response.async_read()

        return parse_xml_body(body)

    async def async_subscribe(
        self,
        url: str,
        remote_host: str,
        remote_port: int,
        callback_host: str,
        callback_port: int,
        timeout: int = DEFAULT_SUBSCRIPTION_TIMEOUT,
    ) -> None:
        """
        Subscribe to events of the service at url.

        Only a single SUBSCRIBE is done, be sure to call again before the
        timeout passes to keep receiving events.

        :param url: Event subscription URL of the service
        :param remote_host: Host of the device
        :param remote_port: Port of the device
        :param callback_host: Host to deliver events at
        :param callback_port: Port to deliver events at
        :param timeout: Requested subscription duration, in seconds
        :raise UpnpValueError: Invalid url, port or timeout
        :raise UpnpCommunicationError (or subclass): Error during request
        """
        # pylint: disable=too-many-arguments
        _validate("url", NON_EMPTY_STR, url)
        _validate("remote_port", PORT, remote_port)
        _validate("callback_port", PORT, callback_port)
        _validate("timeout", POSITIVE_INT, timeout)

        headers = {
            HEADER_USER_AGENT: USER_AGENT,
            "HOST": f"{remote_host}:{remote_port}",
            "CALLBACK": f"<{callback_host}:{callback_port}>",
            "NT": NT_UPNP_EVENT,
            "TIMEOUT": f"Second-{timeout}",
        }

        _LOGGER.debug("Subscribing to: %s, callback: %s", url, headers["CALLBACK"])
        async with self.requester.async_http_request(
            "SUBSCRIBE", url, headers
        ) as response:
            sid = _get_header(response.headers, "SID")

        _LOGGER.debug("Subscribed to: %s, got SID: %s", url, sid)

    async def async_get_data(
        self, url: str, cancel_token: Optional[CancelToken] = None
    ) -> ET.Element:
        """
        Retrieve and parse the (description) document at url.

        :param url: URL of the document
        :param cancel_token: Token to cancel the request with
        :return: Parsed document
        :raise UpnpValueError: Invalid url
        :raise UpnpCancelledError: cancel_token fired before completion
        :raise UpnpCommunicationError (or subclass): Error during request
        :raise UpnpXmlParseError: Document is not valid XML
        """
        _validate("url", NON_EMPTY_STR, url)

        headers = {
            HEADER_USER_AGENT: USER_AGENT,
            HEADER_FRIENDLY_NAME: FRIENDLY_NAME,
        }

        _LOGGER.debug("Getting data from: %s", url)
        async with self.requester.async_http_request(
            "GET", url, headers, cancel_token=cancel_token
        ) as response:
            body = await response.async_read()

        return parse_xml_body(body)


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Get a header, ignoring case."""
    lower_name = name.lower()
    return next(
        (value for key, value in headers.items() if key.lower() == lower_name), None
    )
