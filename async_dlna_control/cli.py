# -*- coding: utf-8 -*-
"""CLI UPnP/DLNA control module."""
# pylint: disable=invalid-name

import argparse
import asyncio
import json
import logging
import sys
import time
import urllib.parse
from typing import Any, Mapping, Optional, Sequence, Tuple
from xml.etree import ElementTree as ET

from async_dlna_control import CancelToken, DeviceService, UpnpControlClient
from async_dlna_control.aiohttp import AiohttpRequester
from async_dlna_control.exceptions import UpnpError
from async_dlna_control.utils import create_soap_envelope

logging.basicConfig()
_LOGGER = logging.getLogger("dlna-control")
_LOGGER.setLevel(logging.ERROR)
_LOGGER_LIB = logging.getLogger("async_dlna_control")
_LOGGER_LIB.setLevel(logging.ERROR)
_LOGGER_TRAFFIC = logging.getLogger("async_dlna_control.traffic")
_LOGGER_TRAFFIC.setLevel(logging.ERROR)


parser = argparse.ArgumentParser(description="dlna_control")
parser.add_argument("--debug", action="store_true", help="Show debug messages")
parser.add_argument("--debug-traffic", action="store_true", help="Show network traffic")
parser.add_argument("--pprint", action="store_true", help="Pretty-print (indent) output")
parser.add_argument("--timeout", type=float, help="Timeout for connection", default=5)
subparsers = parser.add_subparsers(title="Command", dest="command")
subparsers.required = True

subparser = subparsers.add_parser("get-data", help="Get a (description) document")
subparser.add_argument("url", help="URL to the document")
subparser.add_argument(
    "--cancel-after", type=float, help="Cancel the request after this many seconds"
)
subparser = subparsers.add_parser("send-command", help="Send a SOAP command")
subparser.add_argument("base_url", help="Root URL of the device")
subparser.add_argument("service_type", help="Service type, e.g., urn:...:AVTransport:1")
subparser.add_argument("control_url", help="Control URL of the service")
subparser.add_argument("action", help="Action to invoke, e.g., Play")
subparser.add_argument("arguments", nargs="*", help="param1=val1 param2=val2")
subparser.add_argument("--dlna-header", help="Value for contentFeatures.dlna.org")
subparser = subparsers.add_parser("subscribe", help="Subscribe to events")
subparser.add_argument("url", help="Event subscription URL of the service")
subparser.add_argument("--callback", required=True, help="host:port to send events to")
subparser.add_argument(
    "--timeout-seconds", type=int, default=3600, help="Subscription timeout"
)


def print_document(document: ET.Element, pprint: bool) -> None:
    """Print an XML document."""
    if pprint:
        ET.indent(document)
    print(ET.tostring(document, encoding="unicode"))


def parse_arguments(arguments: Sequence[str]) -> Mapping[str, str]:
    """Parse name=value pairs."""
    for argument in arguments:
        if "=" not in argument:
            print(f"Invalid argument value: {argument}", file=sys.stderr)
            print("Use: Argument=value", file=sys.stderr)
            sys.exit(1)

    return dict(argument.split("=", 1) for argument in arguments)


def split_host_port(host_port: str) -> Tuple[str, int]:
    """Split host:port."""
    host, _, port = host_port.rpartition(":")
    if not host or not port.isdigit():
        print(f"Invalid host:port: {host_port}", file=sys.stderr)
        sys.exit(1)

    return host, int(port)


def remote_host_port(url: str) -> Tuple[str, int]:
    """Determine host/port of the device from url."""
    parsed = urllib.parse.urlparse(url)
    if not parsed.hostname:
        print(f"Invalid URL: {url}", file=sys.stderr)
        sys.exit(1)

    port = parsed.port or (443 if parsed.scheme == "https" else 80)
    return parsed.hostname, port


async def get_data(client: UpnpControlClient, args: Any) -> None:
    """Get a document and show it."""
    cancel_token: Optional[CancelToken] = None
    if args.cancel_after:
        cancel_token = CancelToken()
        cancel_token.cancel_after(args.cancel_after)

    document = await client.async_get_data(args.url, cancel_token)
    print_document(document, args.pprint)


async def send_command(client: UpnpControlClient, args: Any) -> None:
    """Send a command and show the response."""
    arguments = parse_arguments(args.arguments)
    service = DeviceService(
        service_type=args.service_type, control_url=args.control_url
    )
    post_data = create_soap_envelope(args.service_type, args.action, arguments)

    _LOGGER.debug(
        "Calling %s#%s, parameters:\n%s",
        args.service_type,
        args.action,
        "\n".join(f"{key}:{value}" for key, value in arguments.items()),
    )
    document = await client.async_send_command(
        args.base_url, service, args.action, post_data, header=args.dlna_header
    )
    print_document(document, args.pprint)


async def subscribe(client: UpnpControlClient, args: Any) -> None:
    """Subscribe to a service."""
    remote_host, remote_port = remote_host_port(args.url)
    callback_host, callback_port = split_host_port(args.callback)

    await client.async_subscribe(
        args.url,
        remote_host,
        remote_port,
        callback_host,
        callback_port,
        args.timeout_seconds,
    )
    obj = {
        "timestamp": time.time(),
        "url": args.url,
        "callback": f"{callback_host}:{callback_port}",
        "timeout": args.timeout_seconds,
    }
    print(json.dumps(obj, indent=4 if args.pprint else None))


async def async_main(args: Any) -> None:
    """Async main."""
    if args.debug:
        _LOGGER.setLevel(logging.DEBUG)
        _LOGGER_LIB.setLevel(logging.DEBUG)
        _LOGGER_TRAFFIC.setLevel(logging.INFO)
    if args.debug_traffic:
        _LOGGER_TRAFFIC.setLevel(logging.DEBUG)

    client = UpnpControlClient(AiohttpRequester(args.timeout))
    if args.command == "get-data":
        await get_data(client, args)
    elif args.command == "send-command":
        await send_command(client, args)
    elif args.command == "subscribe":
        await subscribe(client, args)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Parse arguments and run the main program."""
    args = parser.parse_args(argv)

    try:
        asyncio.run(async_main(args))
    except UpnpError as err:
        _LOGGER.debug("Error running %s", args.command, exc_info=True)
        print(f"Error: {err!r}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        _LOGGER.debug("KeyboardInterrupt")


if __name__ == "__main__":
    main()
