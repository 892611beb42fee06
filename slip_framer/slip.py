"""
SLIP (Serial Line Internet Protocol) datagram framer.

Byte-stuffing per RFC 1055: END=0xC0, ESC=0xDB, ESC_END=0xDC, ESC_ESC=0xDD.
A Framer accumulates every datagram it encodes or decodes in one
append-only list.
"""

import logging
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# SLIP special characters
END = 0xC0
ESC = 0xDB
ESC_END = 0xDC
ESC_ESC = 0xDD

MAX_DATAGRAM_SIZE = 1066
MIN_DATAGRAM_SIZE = 2  # END plus one content byte


class SlipError(Exception):
    """Base exception for SLIP errors."""

    pass


class InvalidConfigError(SlipError):
    """Requested maximum datagram size is below the protocol minimum."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(
            f"max_datagram_size must be at least {MIN_DATAGRAM_SIZE}, got {size}"
        )


class InvalidSlipSequenceError(SlipError):
    """Malformed SLIP stream."""

    def __init__(self, offset: int, reason: str):
        self.offset = offset
        self.reason = reason
        super().__init__(f"Invalid SLIP sequence at offset {offset}: {reason}")


class Framer:
    """
    SLIP encoder/decoder holding an ordered list of datagrams.

    Both serialize() and deserialize() append to the same list; it is never
    cleared for the lifetime of the object.
    """

    def __init__(self, max_datagram_size: int = MAX_DATAGRAM_SIZE, frame_dump: bool = False):
        """
        Initialize an empty framer.

        Args:
            max_datagram_size: Maximum datagram size (at least 2).
            frame_dump: Log every datagram at DEBUG level.

        Raises:
            InvalidConfigError: If max_datagram_size is below 2.
        """
        self._max_datagram_size = MAX_DATAGRAM_SIZE
        self._datagrams: List[bytes] = []
        self.frame_dump = frame_dump

        # Statistics
        self.stats = {
            "datagrams_encoded": 0,
            "datagrams_decoded": 0,
            "bytes_in": 0,
            "slip_errors": 0,
        }

        if max_datagram_size != MAX_DATAGRAM_SIZE:
            self.set_max_datagram_size(max_datagram_size)

    @classmethod
    def from_config(cls, config) -> "Framer":
        """
        Create a framer from a FramerConfig.

        Args:
            config: slip_framer.config.FramerConfig instance.

        Returns:
            New empty Framer.
        """
        return cls(max_datagram_size=config.max_datagram_size, frame_dump=config.frame_dump)

    @property
    def max_datagram_size(self) -> int:
        """Configured maximum datagram size."""
        return self._max_datagram_size

    @property
    def datagrams(self) -> Tuple[bytes, ...]:
        """Snapshot of all datagrams currently held."""
        return tuple(self._datagrams)

    def set_max_datagram_size(self, size: int) -> None:
        """
        Set the maximum datagram size.

        The value is stored only; serialize() always splits at the fixed
        MAX_DATAGRAM_SIZE - 2 threshold.

        Args:
            size: New maximum size in bytes.

        Raises:
            InvalidConfigError: If size is below 2. State is left unchanged.
        """
        if size < MIN_DATAGRAM_SIZE:
            raise InvalidConfigError(size)

        self._max_datagram_size = size
        logger.info(f"max_datagram_size set to {size}")

    def datagram_count(self) -> int:
        """Number of datagrams currently held."""
        return len(self._datagrams)

    def get_datagram(self, index: int) -> Optional[bytes]:
        """
        Get datagram by index.

        Args:
            index: Position in the datagram list.

        Returns:
            Datagram bytes, or None if index is out of range.
        """
        if 0 <= index < len(self._datagrams):
            return self._datagrams[index]
        return None

    def get_data_vector(self) -> bytes:
        """Concatenation of all held datagrams, in order, without separators."""
        return b"".join(self._datagrams)

    def _push(self, datagram: bytes, direction: str) -> None:
        self._datagrams.append(datagram)
        if self.frame_dump:
            logger.debug(f"{direction}: [{len(self._datagrams) - 1}] {datagram.hex()}")

    def serialize(self, data: bytes) -> None:
        """
        Encode data into one or more SLIP datagrams.

        A datagram is closed once it holds MAX_DATAGRAM_SIZE - 2 escaped
        content bytes (one more if an escape pair crosses that point) and is
        terminated by a single END. At least one datagram is always
        produced; empty input yields a lone END.

        Args:
            data: Raw payload bytes.
        """
        datagram = bytearray()
        split_at = MAX_DATAGRAM_SIZE - 2

        for byte in data:
            if byte == END:
                datagram.extend([ESC, ESC_END])
            elif byte == ESC:
                datagram.extend([ESC, ESC_ESC])
            else:
                datagram.append(byte)

            # Escape pairs are never split, so a datagram can hold split_at + 1 bytes
            if len(datagram) >= split_at:
                datagram.append(END)
                self._push(bytes(datagram), "TX")
                self.stats["datagrams_encoded"] += 1
                logger.debug(f"Datagram full at {split_at} bytes, splitting")
                datagram = bytearray()

        datagram.append(END)
        self._push(bytes(datagram), "TX")
        self.stats["datagrams_encoded"] += 1

    def deserialize(self, data: bytes) -> bytes:
        """
        Decode one or more concatenated SLIP frames.

        Every END closes a frame, which is appended to the datagram list
        unescaped. The input must finish exactly on a frame boundary.

        Args:
            data: SLIP-encoded bytes.

        Returns:
            Concatenation of all datagrams held, including those from
            earlier calls.

        Raises:
            InvalidSlipSequenceError: On two ESC bytes in a row or a missing
                trailing END. Frames completed before the error stay appended.
        """
        output = bytearray()
        escape_seen = False
        last_datagram_ended = False
        self.stats["bytes_in"] += len(data)

        for offset, byte in enumerate(data):
            if byte == ESC:
                if escape_seen:
                    self._fail(offset, "consecutive ESC bytes")
                escape_seen = True
                last_datagram_ended = False
            elif byte == ESC_END:
                if escape_seen:
                    output.append(END)
                    escape_seen = False
                    last_datagram_ended = False
            elif byte == ESC_ESC:
                if escape_seen:
                    output.append(ESC)
                    escape_seen = False
                    last_datagram_ended = False
            elif byte == END:
                self._push(bytes(output), "RX")
                self.stats["datagrams_decoded"] += 1
                output = bytearray()
                escape_seen = False
                last_datagram_ended = True
            else:
                # Literal byte; a pending escape is left pending
                output.append(byte)

        if not last_datagram_ended:
            self._fail(len(data), "input does not end on a frame boundary")

        return self.get_data_vector()

    def _fail(self, offset: int, reason: str) -> None:
        self.stats["slip_errors"] += 1
        logger.warning(f"RX: invalid SLIP sequence at offset {offset}: {reason}")
        raise InvalidSlipSequenceError(offset, reason)

    def __len__(self) -> int:
        return len(self._datagrams)

    def __iter__(self) -> Iterator[bytes]:
        return iter(tuple(self._datagrams))


def encode(data: bytes) -> List[bytes]:
    """
    Encode data using SLIP framing.

    Args:
        data: Raw data to encode.

    Returns:
        List of SLIP datagrams, each ending with END.
    """
    framer = Framer()
    framer.serialize(data)
    return list(framer.datagrams)


def decode(data: bytes) -> bytes:
    """
    Decode SLIP-framed data.

    Args:
        data: SLIP-encoded data (may contain multiple frames).

    Returns:
        Recovered payload of every frame, concatenated.

    Raises:
        InvalidSlipSequenceError: If the stream is malformed.
    """
    return Framer().deserialize(data)
