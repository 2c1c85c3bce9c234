"""
CLI Main - Entry point for the `hetzner-tools` command.
"""

import dataclasses
import sys

from ..config import HetznerConfig
from ..logging import configure_logging
from .commands import print_error, run_command
from .parser import create_parser

__all__ = ["main"]


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code.

    Args:
        argv: Arguments without the program name (sys.argv[1:] if None)
    """
    parser = create_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.command is None:
        parser.print_help()
        return 0

    config = HetznerConfig()
    if args.log_level:
        config = dataclasses.replace(config, log_level=args.log_level)
    configure_logging(config.log_level, json=args.json_logs)

    try:
        return run_command(args.command, args, config)
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        print_error(str(e) or type(e).__name__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
