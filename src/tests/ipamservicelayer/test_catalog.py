# Copyright 2025 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from netaddr import IPAddress

from ipamservicelayer.exceptions.catalog import (
    BaseException,
    BaseExceptionDetail,
    NetworkReservationIpNotOwnedException,
)
from ipamservicelayer.exceptions.constants import (
    IP_NOT_OWNED_BY_NETWORK_VIOLATION_TYPE,
)
from ipamtesting.factory import factory


class TestNetworkReservationIpNotOwnedException:
    def test_message_and_context(self):
        network_name = factory.make_name("network")
        ip = factory.make_ipv4_address()
        exc = NetworkReservationIpNotOwnedException(
            int(IPAddress(ip)), network_name
        )
        assert isinstance(exc, BaseException)
        assert exc.ip == int(IPAddress(ip))
        assert exc.network_name == network_name
        assert str(exc) == (
            f"Can't release IP `{ip}' back to `{network_name}' network: "
            "it's neither in dynamic nor in static pool"
        )
        assert exc.details == [
            BaseExceptionDetail(
                type=IP_NOT_OWNED_BY_NETWORK_VIOLATION_TYPE,
                message=str(exc),
                field="ip",
                location=network_name,
            )
        ]

    def test_ipv6_integer(self):
        exc = NetworkReservationIpNotOwnedException(1, "v6", version=6)
        assert "`::1'" in str(exc)
