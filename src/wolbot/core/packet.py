"""Wake-on-LAN magic packet encoding and transmission."""

from __future__ import annotations

import logging
import socket

from wakeonlan import create_magic_packet

from wolbot.errors import TransmissionError
from wolbot.models.validation import parse_mac

logger = logging.getLogger(__name__)

DEFAULT_BROADCAST_IP = "255.255.255.255"
WOL_PORT = 9
PACKET_SIZE = 102


def encode_magic_packet(mac: str) -> bytes:
    """Build the 102 byte payload: 6 x 0xFF followed by the MAC 16 times."""
    return create_magic_packet(parse_mac(mac))


def send_packet(payload: bytes, address: str, port: int = WOL_PORT) -> None:
    """Send ``payload`` once as a UDP broadcast datagram.

    There is no acknowledgment in WoL; success only means the local stack
    accepted the datagram.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            sock.sendto(payload, (address, port))
    except OSError as exc:
        raise TransmissionError(
            f"Failed to send packet to {address}:{port}: {exc}"
        ) from exc


def wake(mac: str, address: str = DEFAULT_BROADCAST_IP, port: int = WOL_PORT) -> None:
    payload = encode_magic_packet(mac)
    logger.info("Sending WoL magic packet to %s via %s:%d", mac, address, port)
    send_packet(payload, address, port)
    logger.debug("WoL packet sent")
