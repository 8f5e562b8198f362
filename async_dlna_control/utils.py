# -*- coding: utf-8 -*-
"""Utils for async_dlna_control."""

import logging
from typing import Mapping, Optional
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

import defusedxml.ElementTree as DET
from defusedxml import DefusedXmlException

from async_dlna_control.exceptions import UpnpXmlParseError

_LOGGER = logging.getLogger(__name__)


def normalize_service_url(base_url: str, service_url: str) -> str:
    """
    Make service_url absolute, relative to base_url.

    Already complete URLs are returned as is. Otherwise the path is anchored
    at the root and appended to base_url, without any further joining.
    """
    if service_url[:4].lower() == "http":
        return service_url

    if not service_url.startswith("/"):
        service_url = "/" + service_url

    return base_url + service_url


def quote_soap_action(soap_action: str) -> str:
    """Surround soap_action with double quotes, if not done already."""
    if soap_action.startswith('"'):
        return soap_action

    return f'"{soap_action}"'


def create_soap_envelope(
    service_type: str, action: str, arguments: Optional[Mapping[str, str]] = None
) -> str:
    """Create a SOAP envelope invoking action with arguments."""
    soap_args = "".join(
        f"<{name}>{escape(value)}</{name}>" for name, value in (arguments or {}).items()
    )
    return (
        f'<?xml version="1.0" encoding="utf-8"?>'
        f'<s:Envelope s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/"'
        f' xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">'
        f"<s:Body>"
        f'<u:{action} xmlns:u="{service_type}">'
        f"{soap_args}"
        f"</u:{action}>"
        f"</s:Body>"
        f"</s:Envelope>"
    )


def parse_xml_body(body: bytes) -> ET.Element:
    """
    Decode body as UTF-8 and parse it, keeping whitespace in text nodes.

    :raise UpnpXmlParseError: body is not well-formed XML, or declares
        entities or external references
    """
    text = body.decode("utf-8-sig", errors="replace")
    try:
        return DET.fromstring(text.rstrip(" \t\r\n\0"))
    except (ET.ParseError, DefusedXmlException) as err:
        _LOGGER.debug("Unable to parse XML: %r\nXML:\n%s", err, text)
        raise UpnpXmlParseError(err) from err
