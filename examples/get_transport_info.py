#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Example to get the transport state of a DLNA/DMR capable TV.

Change the base_url and service variables below to point at your TV.
"""

import asyncio
import logging

from async_dlna_control import DeviceService, UpnpControlClient
from async_dlna_control.aiohttp import AiohttpRequester
from async_dlna_control.utils import create_soap_envelope

logging.basicConfig(level=logging.INFO)


base_url = "http://192.168.178.11:49152"
service = DeviceService(
    service_type="urn:schemas-upnp-org:service:AVTransport:1",
    control_url="/upnp/control/AVTransport1",
)


async def main():
    client = UpnpControlClient(AiohttpRequester())

    # perform GetTransportInfo action
    envelope = create_soap_envelope(
        service.service_type, "GetTransportInfo", {"InstanceID": "0"}
    )
    document = await client.async_send_command(
        base_url, service, "GetTransportInfo", envelope
    )
    state = document.find(".//CurrentTransportState")
    print("Transport state: {}".format(state.text if state is not None else None))


asyncio.run(main())
