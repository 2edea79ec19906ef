# Copyright 2025 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import List

from netaddr import IPRange
from pydantic import BaseModel, Field, IPvAnyAddress

from ipamcommon.utils.network import make_iprange


class NetworkRange(BaseModel):
    """An already parsed network range together with the addresses that are
    excluded from dynamic assignment and those designated static."""

    name: str
    first_ip: IPvAnyAddress
    last_ip: IPvAnyAddress
    reserved_ips: List[IPvAnyAddress] = Field(default_factory=list)
    static_ips: List[IPvAnyAddress] = Field(default_factory=list)

    def to_iprange(self) -> IPRange:
        # we receive ipaddress addresses but we have to translate them to
        # netaddr ones.
        return make_iprange(str(self.first_ip), str(self.last_ip))
