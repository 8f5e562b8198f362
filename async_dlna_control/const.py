# -*- coding: utf-8 -*-
"""Constants module."""

from typing import NamedTuple

# Renderers sniff these values, do not change them.
USER_AGENT = "Microsoft-Windows/6.2 UPnP/1.0 Microsoft-DLNA DLNADOC/1.50"
FRIENDLY_NAME = "Jellyfin"

HEADER_USER_AGENT = "User-Agent"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_SOAP_ACTION = "SOAPAction"
HEADER_PRAGMA = "Pragma"
HEADER_FRIENDLY_NAME = "FriendlyName.DLNA.ORG"
HEADER_CONTENT_FEATURES = "contentFeatures.dlna.org"

CONTENT_TYPE_XML = "text/xml"

NT_UPNP_EVENT = "upnp:event"
DEFAULT_SUBSCRIPTION_TIMEOUT = 3600

NS = {
    "soap_envelope": "http://schemas.xmlsoap.org/soap/envelope/",
    "device": "urn:schemas-upnp-org:device-1-0",
    "service": "urn:schemas-upnp-org:service-1-0",
    "event": "urn:schemas-upnp-org:event-1-0",
    "control": "urn:schemas-upnp-org:control-1-0",
}


class DeviceService(NamedTuple):
    """A controllable service on a remote device."""

    service_type: str
    control_url: str
    service_id: str = ""
    scpd_url: str = ""
    event_sub_url: str = ""
