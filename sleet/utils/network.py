"""Derives a fallback data center id from the host's address.

This module provides:
- address_to_integer: a function packing a dotted IPv4 address into an int, lowest octet first
- local_address: a function returning this host's IPv4 address
- resolve_default_data_center: a function mapping the local address onto a data center id

The random fallback in ``resolve_default_data_center`` may collide with another host's data center.
Pass ``data_center_id`` explicitly when uniqueness across a fleet matters.
"""

import logging
import socket
from secrets import randbelow

from ..constants import MAX_DATA_CENTER_ID
from .errors import MalformedAddressError

logger = logging.getLogger(__name__)


def address_to_integer(address: str) -> int:
    """Packs a dotted-decimal IPv4 address into an integer in reverse octet order.

    The last octet lands in the most significant byte, so hosts sharing a subnet
    still spread out once the result is reduced modulo 32.

    Args:
        address (str): An address like ``"10.0.3.17"``

    Returns:
        int: ``(d << 24) + (c << 16) + (b << 8) + a`` for address ``a.b.c.d``

    Raises:
        MalformedAddressError: If the address is empty or isn't four numbers from 0 to 255
    """
    if not address:
        raise MalformedAddressError(f"Cannot convert an empty address: {address!r}")
    parts = address.split(".")
    if len(parts) != 4:  # noqa PLR2004
        raise MalformedAddressError(f"Address must have exactly four parts: {address!r}")
    if not all(part.isascii() and part.isdigit() for part in parts):
        raise MalformedAddressError(f"Address parts must be numbers: {address!r}")
    octets = [int(part) for part in parts]
    if any(octet > 255 for octet in octets):  # noqa PLR2004
        raise MalformedAddressError(f"Address parts must be between 0 and 255: {address!r}")
    return (octets[3] << 24) + (octets[2] << 16) + (octets[1] << 8) + octets[0]


def local_address() -> str:
    """Looks up the IPv4 address of this host by its hostname."""
    return socket.gethostbyname(socket.gethostname())


def resolve_default_data_center() -> int:
    """Picks a data center id from the local address, or at random if that fails.

    Returns:
        int: A data center id in [0, 31]
    """
    try:
        return address_to_integer(local_address()) % (MAX_DATA_CENTER_ID + 1)
    except Exception as e:  # any lookup failure falls back, e.g. UnicodeError for odd hostnames
        data_center_id = randbelow(MAX_DATA_CENTER_ID + 1)
        logger.warning(
            f"Could not resolve local address ({e}). "
            f"Using random data center id {data_center_id}, collisions are possible"
        )
        return data_center_id
