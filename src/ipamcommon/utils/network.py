# Copyright 2025 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from ipaddress import IPv4Address, IPv6Address
from typing import Iterable, Optional, Union

from netaddr import IPAddress, IPNetwork, IPRange, IPSet
from netaddr.strategy import ipv4, ipv6

AddressLike = Union[int, str, IPAddress, IPv4Address, IPv6Address]

MAX_INT = {4: ipv4.max_int, 6: ipv6.max_int}
WIDTH = {4: ipv4.width, 6: ipv6.width}


def inet_ntop(value, version: Optional[int] = None):
    """Convert IPv4 and IPv6 addresses from integer to text form.
    (See also inet_ntop(3), the C function with the same name and function.)"""
    return str(to_ip_address(value, version))


def to_ip_address(value: AddressLike, version: Optional[int] = None):
    """Return `value` as a `netaddr.IPAddress`.

    :param value: an integer, a textual address, or an address object from
        either netaddr or the standard library `ipaddress` module.
    :param version: the IP version used to interpret integers. Without it,
        netaddr guesses from the magnitude of the value, which is wrong for
        IPv6 addresses below 2**32. Integers too large for `version` are
        left for netaddr to guess.
    """
    if isinstance(value, IPAddress):
        return value
    if isinstance(value, int):
        if version is None or value > MAX_INT[version]:
            return IPAddress(value)
        return IPAddress(value, version)
    return IPAddress(str(value))


def make_iprange(first, last=None, version: Optional[int] = None) -> IPRange:
    """Returns an `IPRange` for the specified span of addresses.

    :param last: the (inclusive) upper bound of the range. If not supplied,
        uses the lower bound (creating a range of 1 address).
    """
    if last is None:
        last = first
    return IPRange(to_ip_address(first, version), to_ip_address(last, version))


def make_ip_set(
    addresses: Iterable[AddressLike], version: Optional[int] = None
) -> IPSet:
    """Build an `IPSet` holding every address in `addresses`."""
    return IPSet(to_ip_address(address, version) for address in addresses)


def largest_block_containing(
    ip_set: IPSet, address: IPAddress
) -> Optional[IPNetwork]:
    """Returns the largest CIDR block that contains `address` and lies
    entirely within `ip_set`, or None if `address` is not in the set.

    The search walks the prefix lengths only, so its cost does not depend on
    how many blocks make up the set.
    """
    for prefixlen in range(WIDTH[address.version] + 1):
        block = IPNetwork(f"{address}/{prefixlen}").cidr
        if block in ip_set:
            return block
    return None
