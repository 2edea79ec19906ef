#  Copyright 2025 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from enum import StrEnum


class IpReservationType(StrEnum):
    """The pool an explicitly reserved IP address was taken from."""

    # Designated ahead of time for a specific workload and requested by
    # exact value.
    STATIC = "static"

    # Eligible for automatic assignment out of the network range.
    DYNAMIC = "dynamic"

    def __str__(self) -> str:
        return str(self.value)
