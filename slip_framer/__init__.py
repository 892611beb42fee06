"""
SLIP Framer - Serial Line Internet Protocol datagram framing

Byte-stuffing encoder/decoder that splits payloads into size-bounded,
END-terminated datagrams and recovers payloads from concatenated frames.
"""

__version__ = "0.1.0"
__author__ = "SLIP Framer Contributors"

from slip_framer.slip import (
    Framer,
    InvalidConfigError,
    InvalidSlipSequenceError,
    SlipError,
)

__all__ = [
    "Framer",
    "InvalidConfigError",
    "InvalidSlipSequenceError",
    "SlipError",
    "__version__",
]
