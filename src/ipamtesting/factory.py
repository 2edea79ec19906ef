# Copyright 2025 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Test object factories."""


from functools import partial
from itertools import islice, repeat
import random
import string

from netaddr import IPAddress, IPNetwork, IPRange

from ipamservicelayer.models.networks import NetworkRange


class TooManyRandomRetries(Exception):
    """Something that relies on luck did not get lucky.

    Some factory methods need to generate random items until they find one
    that meets certain requirements.  This exception indicates that it took
    too many retries, which may mean that no matching item is possible.
    """


class Factory:
    random_letters = map(
        random.choice, repeat(string.ascii_letters + string.digits)
    )

    random_octet = partial(random.randint, 0, 255)

    random_octets = iter(random_octet, None)

    def make_string(self, size=10, prefix=""):
        """Return a `str` filled with random ASCII letters or digits."""
        return prefix + "".join(islice(self.random_letters, size))

    def make_name(self, prefix=None, sep="-", size=6):
        """Generate a random name.

        :param prefix: Optional prefix.  Pass one to help make test failures
            and tracebacks easier to read!
        :param sep: Separator that will go between the prefix and the random
            portion of the name.  Defaults to a dash.
        :param size: Length of the random portion of the name.
        :return: A randomized unicode string.
        """
        if prefix is None:
            return self.make_string(size=size)
        else:
            return prefix + sep + self.make_string(size=size)

    def make_ipv4_address(self):
        octets = list(islice(self.random_octets, 4))
        if octets[0] == 0:
            octets[0] = 1
        return "%d.%d.%d.%d" % tuple(octets)

    def make_ipv6_address(self):
        # We return from the fc00::/7 space because that's a private
        # space and shouldn't cause problems of addressing the outside
        # world.
        network = IPNetwork("fc00::/7")
        # We can't use random.choice() because there are too many
        # elements in network.
        random_address_index = random.randint(0, network.size - 1)
        return str(IPAddress(network[random_address_index]))

    def make_ipv4_network(self, slash=None):
        """Generate a random IPv4 network.

        :param slash: Bit width of the network. Defaults to somewhere
            between 24 and 28.
        :rtype: :class:`IPNetwork`
        """
        if slash is None:
            slash = random.randint(24, 28)
        return IPNetwork(f"{self.make_ipv4_address()}/{slash}").cidr

    def make_ipv6_network(self, slash=None):
        """Generate a random IPv6 network.

        :param slash: Bit width of the network. Defaults to somewhere
            between 112 and 124.
        :rtype: :class:`IPNetwork`
        """
        if slash is None:
            slash = random.randint(112, 124)
        return IPNetwork(f"{self.make_ipv6_address()}/{slash}").cidr

    def make_ip_range(self, network=None):
        """Return an `IPRange` spanning at least two addresses of `network`.

        :param network: Return a range within this network. Defaults to a
            random IPv4 network.
        """
        if network is None:
            network = self.make_ipv4_network()
        for _ in range(100):
            first, last = sorted(
                random.randint(network.first, network.last) for _ in range(2)
            )
            if first < last:
                return IPRange(
                    IPAddress(first, network.version),
                    IPAddress(last, network.version),
                )
        raise TooManyRandomRetries(
            "Could not find available IP range in network: %s" % network
        )

    def pick_ips_in_range(self, ip_range, count, *, but_not=()):
        """Return `count` distinct integer addresses from `ip_range`,
        avoiding any address in `but_not`."""
        but_not = {int(IPAddress(but)) for but in but_not}
        candidates = [
            ip
            for ip in range(ip_range.first, ip_range.last + 1)
            if ip not in but_not
        ]
        if len(candidates) < count:
            raise ValueError(
                "Not enough addresses in range: %s (count=%d)"
                % (ip_range, count)
            )
        return random.sample(candidates, count)

    def make_network_range(
        self, name=None, ip_range=None, reserved_ips=(), static_ips=()
    ):
        if name is None:
            name = self.make_name("network")
        if ip_range is None:
            ip_range = self.make_ip_range()
        return NetworkRange(
            name=name,
            first_ip=str(IPAddress(ip_range.first, ip_range.version)),
            last_ip=str(IPAddress(ip_range.last, ip_range.version)),
            reserved_ips=[
                str(IPAddress(ip, ip_range.version)) for ip in reserved_ips
            ],
            static_ips=[
                str(IPAddress(ip, ip_range.version)) for ip in static_ips
            ],
        )


# Create factory singleton.
factory = Factory()
