"""
Command-line SLIP encoder/decoder.

Encodes a hex payload into SLIP datagrams, or decodes a hex SLIP stream.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from slip_framer.config import LOG_LEVELS, configure_logging, load_config
from slip_framer.slip import Framer, SlipError

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for slip-framer tool."""
    parser = argparse.ArgumentParser(description="Encode/decode SLIP datagrams")
    parser.add_argument("--config", type=Path, default=None, help="TOML config file")
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Override log level"
    )
    parser.add_argument("--max-size", type=int, default=None, help="Max datagram size")
    parser.add_argument("mode", choices=["encode", "decode"], help="Operation")
    parser.add_argument("data", help="Input as hex string")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: Invalid config: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        config.logging.level = args.log_level
    configure_logging(config.logging)
    logger.debug(f"Config: {config.model_dump()}")

    try:
        data = bytes.fromhex(args.data)
    except ValueError:
        print(f"Error: Invalid hex input '{args.data}'", file=sys.stderr)
        return 1

    try:
        framer = Framer.from_config(config.framer)
        if args.max_size is not None:
            framer.set_max_datagram_size(args.max_size)

        if args.mode == "encode":
            framer.serialize(data)
            for datagram in framer:
                print(datagram.hex())
        else:
            print(framer.deserialize(data).hex())

    except SlipError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
