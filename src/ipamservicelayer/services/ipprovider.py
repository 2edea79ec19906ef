# Copyright 2025 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

import heapq
from typing import Iterable, List, Optional

from netaddr import IPAddress, IPNetwork, IPRange, IPSet
import structlog
from structlog.typing import BindableLogger

from ipamcommon.enums.ipaddress import IpReservationType
from ipamcommon.utils.network import (
    AddressLike,
    largest_block_containing,
    make_ip_set,
    make_iprange,
    to_ip_address,
)
from ipamservicelayer.exceptions.catalog import (
    NetworkReservationIpNotOwnedException,
)
from ipamservicelayer.models.networks import NetworkRange

LOG_TAG = "[ip-reservation][in-memory-ip-provider]"

default_logger = structlog.get_logger()


class InMemoryIpProvider:
    """Bookkeeping of the free addresses of a single network range.

    Addresses of the range that are neither reserved nor static form the
    dynamic pool and are handed out by `allocate_dynamic_ip`. Static
    addresses form the static pool and are only handed out when requested
    by value through `reserve_ip`. Both pools are fixed at construction;
    only the sets of available addresses change afterwards.

    Nothing here is persisted or locked: callers serialize access and
    rebuild the provider from their own records after a restart.
    """

    def __init__(
        self,
        ip_range: IPRange | IPNetwork,
        network_name: str,
        reserved_ips: Iterable[AddressLike],
        static_ips: Iterable[AddressLike],
        logger: Optional[BindableLogger] = None,
    ):
        """
        :param ip_range: every address between its `first` and `last`
            (inclusive) is managed here.
        :param network_name: the network this range belongs to.
        :param reserved_ips: addresses excluded from dynamic assignment
            without being static, e.g. the gateway.
        :param static_ips: addresses designated for static assignment.
        :param logger: a structlog-compatible logger. Defaults to the module
            logger.
        """
        self._ip_range = ip_range
        self._network_name = network_name
        self._version = ip_range.version
        self._logger = logger if logger is not None else default_logger

        range_ip_set = IPSet(
            make_iprange(ip_range.first, ip_range.last, self._version)
        )
        static_ip_set = make_ip_set(static_ips, self._version)
        self._available_dynamic_ips = (
            range_ip_set
            - make_ip_set(reserved_ips, self._version)
            - static_ip_set
        )
        self._available_static_ips = static_ip_set

        # Keep the initial pools to know where released IPs go back to.
        self._dynamic_ip_pool = self._available_dynamic_ips.copy()
        self._static_ip_pool = self._available_static_ips.copy()

        # Addresses of the range outside the dynamic pool, skipped in whole
        # CIDR blocks when looking for the next dynamic IP.
        self._excluded_ips = range_ip_set - self._dynamic_ip_pool
        # Every available dynamic IP below this cursor is in the heap of
        # released IPs.
        self._next_dynamic_ip = ip_range.first
        self._released_dynamic_ips: List[int] = []

    @classmethod
    def from_network_range(
        cls,
        network_range: NetworkRange,
        logger: Optional[BindableLogger] = None,
    ) -> "InMemoryIpProvider":
        return cls(
            network_range.to_iprange(),
            network_range.name,
            network_range.reserved_ips,
            network_range.static_ips,
            logger=logger,
        )

    @property
    def network_name(self) -> str:
        return self._network_name

    @property
    def ip_range(self) -> IPRange | IPNetwork:
        return self._ip_range

    @property
    def dynamic_ip_pool(self) -> IPSet:
        return self._dynamic_ip_pool.copy()

    @property
    def static_ip_pool(self) -> IPSet:
        return self._static_ip_pool.copy()

    @property
    def available_dynamic_ips(self) -> IPSet:
        return self._available_dynamic_ips.copy()

    @property
    def available_static_ips(self) -> IPSet:
        return self._available_static_ips.copy()

    def allocate_dynamic_ip(self) -> Optional[int]:
        """Take any available dynamic IP out of the pool.

        The lowest available address is returned, but callers must not
        depend on the order in which addresses are handed out.

        :return: the integer value of the address, or None when the dynamic
            pool is exhausted.
        """
        ip = self._lowest_available_dynamic_ip()
        if ip is None:
            self._logger.debug(
                f"{LOG_TAG} No dynamic ip available "
                f"in network '{self._network_name}'"
            )
            return None
        address = to_ip_address(ip, self._version)
        self._logger.debug(f"{LOG_TAG} Allocating dynamic ip '{address}'")
        self._available_dynamic_ips.remove(address)
        return ip

    def reserve_ip(self, ip: AddressLike) -> Optional[IpReservationType]:
        """Take the given IP out of whichever pool has it available.

        The static pool is checked first, so a static address is never
        accounted for as a dynamic one.

        :return: the pool the address was taken from, or None if it is not
            available in either pool (already taken, or not owned by this
            network).
        """
        address = to_ip_address(ip, self._version)
        if address in self._available_static_ips:
            self._available_static_ips.remove(address)
            self._logger.debug(f"{LOG_TAG} Reserved static ip '{address}'")
            return IpReservationType.STATIC
        if address in self._available_dynamic_ips:
            self._available_dynamic_ips.remove(address)
            self._logger.debug(f"{LOG_TAG} Reserved dynamic ip '{address}'")
            return IpReservationType.DYNAMIC
        self._logger.error(f"{LOG_TAG} Failed to reserve ip '{address}'")
        return None

    def release_ip(self, ip: AddressLike) -> None:
        """Give the IP back to the pool it was originally part of.

        Releasing an address that is already available is accepted.

        :raises NetworkReservationIpNotOwnedException: if the address is
            neither in the dynamic nor in the static pool of this network.
        """
        address = to_ip_address(ip, self._version)
        if address in self._dynamic_ip_pool:
            if self._release(address, "dynamic", self._available_dynamic_ips):
                if int(address) < self._next_dynamic_ip:
                    heapq.heappush(self._released_dynamic_ips, int(address))
        elif address in self._static_ip_pool:
            self._release(address, "static", self._available_static_ips)
        else:
            self._logger.debug(
                f"{LOG_TAG} Failed to release ip '{address}': "
                "does not belong to static or dynamic pool"
            )
            raise NetworkReservationIpNotOwnedException(
                int(address), self._network_name, address.version
            )

    def _release(
        self, address: IPAddress, pool_name: str, available: IPSet
    ) -> bool:
        """Add `address` back to `available`.

        :return: whether the address was held until now.
        """
        if address in available:
            self._logger.debug(
                f"{LOG_TAG} Releasing {pool_name} ip '{address}' "
                "which is already available"
            )
            return False
        self._logger.debug(f"{LOG_TAG} Releasing {pool_name} ip '{address}'")
        available.add(address)
        return True

    def _lowest_available_dynamic_ip(self) -> Optional[int]:
        released = self._released_dynamic_ips
        while released and (
            to_ip_address(released[0], self._version)
            not in self._available_dynamic_ips
        ):
            heapq.heappop(released)
        if released:
            return released[0]

        last = self._ip_range.last
        while self._next_dynamic_ip <= last:
            address = to_ip_address(self._next_dynamic_ip, self._version)
            if address in self._available_dynamic_ips:
                return self._next_dynamic_ip
            if address in self._dynamic_ip_pool:
                self._next_dynamic_ip += 1
            else:
                block = largest_block_containing(self._excluded_ips, address)
                self._next_dynamic_ip = block.last + 1
        return None
