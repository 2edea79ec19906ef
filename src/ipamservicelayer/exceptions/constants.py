# Copyright 2025 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

# IP reservations
IP_NOT_OWNED_BY_NETWORK_VIOLATION_TYPE = "IpNotOwnedByNetworkViolation"
