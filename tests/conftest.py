# -*- coding: utf-8 -*-
"""Fixtures for async_dlna_control tests."""

from typing import Mapping, Tuple

import pytest

from async_dlna_control import DeviceService, UpnpControlClient

from .upnp_test_requester import ResponseType, UpnpTestRequester

BASE_URL = "http://dlna_dmr:1234"

AVTRANSPORT_SERVICE = DeviceService(
    service_type="urn:schemas-upnp-org:service:AVTransport:1",
    control_url="/upnp/control/AVTransport1",
    service_id="urn:upnp-org:serviceId:AVTransport",
    scpd_url="/AVTransport_1.xml",
    event_sub_url="/upnp/event/AVTransport1",
)

DEVICE_XML = """<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
  <specVersion>
    <major>1</major>
    <minor>0</minor>
  </specVersion>
  <device>
    <deviceType>urn:schemas-upnp-org:device:MediaRenderer:1</deviceType>
    <friendlyName>Dummy TV</friendlyName>
    <UDN>uuid:00000000-0000-0000-0000-000000000000</UDN>
  </device>
</root>
"""

PLAY_RESPONSE_XML = """<?xml version="1.0"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" \
s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">
  <s:Body>
    <u:PlayResponse xmlns:u="urn:schemas-upnp-org:service:AVTransport:1"/>
  </s:Body>
</s:Envelope>
"""

RESPONSE_MAP: Mapping[Tuple[str, str], ResponseType] = {
    ("GET", "http://dlna_dmr:1234/device.xml"): (200, {}, DEVICE_XML),
    ("POST", "http://dlna_dmr:1234/upnp/control/AVTransport1"): (
        200,
        {},
        PLAY_RESPONSE_XML,
    ),
    ("SUBSCRIBE", "http://dlna_dmr:1234/upnp/event/AVTransport1"): (
        200,
        {"sid": "uuid:dummy-avt1", "timeout": "Second-1800"},
        "",
    ),
}


@pytest.fixture
def requester() -> UpnpTestRequester:
    """Return a test requester."""
    return UpnpTestRequester(RESPONSE_MAP)


@pytest.fixture
def client(requester: UpnpTestRequester) -> UpnpControlClient:
    """Return a control client using the test requester."""
    return UpnpControlClient(requester)
