# Copyright 2025 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from pydantic import BaseModel

from ipamcommon.utils.network import inet_ntop
from ipamservicelayer.exceptions.constants import (
    IP_NOT_OWNED_BY_NETWORK_VIOLATION_TYPE,
)


class BaseExceptionDetail(BaseModel):
    type: str
    message: str
    field: str | None = None
    location: str | None = None


class BaseException(Exception):
    def __init__(
        self, message: str, details: list[BaseExceptionDetail] | None = None
    ):
        super().__init__(message)
        self.details = details


class NetworkReservationIpNotOwnedException(BaseException):
    """An IP address was released to a network that never owned it."""

    def __init__(
        self, ip: int, network_name: str, version: int | None = None
    ):
        message = (
            f"Can't release IP `{inet_ntop(ip, version)}' "
            f"back to `{network_name}' network: "
            "it's neither in dynamic nor in static pool"
        )
        super().__init__(
            message,
            [
                BaseExceptionDetail(
                    type=IP_NOT_OWNED_BY_NETWORK_VIOLATION_TYPE,
                    message=message,
                    field="ip",
                    location=network_name,
                )
            ],
        )
        self.ip = ip
        self.network_name = network_name
