"""Unit tests for utils."""

from xml.etree import ElementTree as ET

import pytest

from async_dlna_control.exceptions import UpnpXmlParseError
from async_dlna_control.utils import (
    create_soap_envelope,
    normalize_service_url,
    parse_xml_body,
    quote_soap_action,
)

BASE_URL = "http://192.168.1.1:1400"


@pytest.mark.parametrize(
    "service_url",
    [
        "http://192.168.1.2:1400/control",
        "https://192.168.1.2/control",
        "HTTP://192.168.1.2/control",
        "Https://192.168.1.2/control",
        "httpcontrol",
    ],
)
def test_normalize_service_url_absolute(service_url: str) -> None:
    """Test already absolute URLs are kept as is."""
    assert normalize_service_url(BASE_URL, service_url) == service_url


def test_normalize_service_url_root_relative() -> None:
    """Test root-relative paths are appended to the base URL."""
    assert (
        normalize_service_url(BASE_URL, "/MediaRenderer/AVTransport/Control")
        == "http://192.168.1.1:1400/MediaRenderer/AVTransport/Control"
    )


def test_normalize_service_url_relative() -> None:
    """Test relative paths are anchored at the root."""
    assert (
        normalize_service_url(BASE_URL, "AVTransport/Control")
        == "http://192.168.1.1:1400/AVTransport/Control"
    )


def test_normalize_service_url_no_slash_collapsing() -> None:
    """Test doubled slashes are not collapsed."""
    assert normalize_service_url(BASE_URL + "/", "/ctl") == BASE_URL + "//ctl"
    assert normalize_service_url(BASE_URL, "//ctl") == BASE_URL + "//ctl"


def test_quote_soap_action() -> None:
    """Test quoting of SOAP actions."""
    assert quote_soap_action("urn:x:Test:1#Play") == '"urn:x:Test:1#Play"'
    assert quote_soap_action('"urn:x:Test:1#Play"') == '"urn:x:Test:1#Play"'


def test_create_soap_envelope() -> None:
    """Test creating a SOAP envelope."""
    envelope = create_soap_envelope(
        "urn:schemas-upnp-org:service:AVTransport:1",
        "SetAVTransportURI",
        {"InstanceID": "0", "CurrentURI": "http://server/a&b.mp3"},
    )
    root = ET.fromstring(envelope)
    ns = {
        "s": "http://schemas.xmlsoap.org/soap/envelope/",
        "u": "urn:schemas-upnp-org:service:AVTransport:1",
    }
    action = root.find("s:Body/u:SetAVTransportURI", ns)
    assert action is not None
    assert action.findtext("InstanceID") == "0"
    assert action.findtext("CurrentURI") == "http://server/a&b.mp3"


def test_parse_xml_body_preserves_whitespace() -> None:
    """Test whitespace in text nodes is kept."""
    root = parse_xml_body(b"<root><title>  Some Title \n</title>\n</root>")
    assert root.findtext("title") == "  Some Title \n"
    assert root.text is None
    title = root.find("title")
    assert title is not None
    assert title.tail == "\n"


def test_parse_xml_body_bom_and_padding() -> None:
    """Test a UTF-8 BOM and trailing NUL padding are tolerated."""
    root = parse_xml_body(
        "\ufeff<root><name>Caf\xe9</name></root>\r\n\0\0".encode("utf-8")
    )
    assert root.findtext("name") == "Caf\xe9"


def test_parse_xml_body_invalid_utf8() -> None:
    """Test undecodable bytes are replaced."""
    root = parse_xml_body(b"<root><name>\xff</name></root>")
    assert root.findtext("name") == "\ufffd"


@pytest.mark.parametrize(
    "body", [b"", b"<root>", b"<root><unterminated></root>", b"not xml"]
)
def test_parse_xml_body_malformed(body: bytes) -> None:
    """Test malformed XML raises UpnpXmlParseError."""
    with pytest.raises(UpnpXmlParseError):
        parse_xml_body(body)


@pytest.mark.parametrize(
    "body",
    [
        b'<!DOCTYPE r [<!ENTITY e "x">]><r>&e;</r>',
        b'<!DOCTYPE r [<!ENTITY e SYSTEM "file:///etc/passwd">]><r>&e;</r>',
    ],
)
def test_parse_xml_body_entities_refused(body: bytes) -> None:
    """Test entity declarations raise UpnpXmlParseError."""
    with pytest.raises(UpnpXmlParseError):
        parse_xml_body(body)
