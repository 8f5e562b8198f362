# -*- coding: utf-8 -*-
"""UPnP/DLNA control module."""

from async_dlna_control.cancel import CancelToken  # noqa: F401
from async_dlna_control.client import UpnpRequester  # noqa: F401
from async_dlna_control.client import UpnpResponse  # noqa: F401
from async_dlna_control.const import DeviceService  # noqa: F401
from async_dlna_control.control_client import UpnpControlClient  # noqa: F401
from async_dlna_control.exceptions import UpnpError  # noqa: F401
from async_dlna_control.utils import normalize_service_url  # noqa: F401
