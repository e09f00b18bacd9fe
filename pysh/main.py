#!/usr/bin/env python3
"""
pysh - A minimal interactive command shell

This is the main entry point for pysh.

Start-up sequence:
1. Parse command-line flags
2. Load configuration (only when --config is given)
3. Initialize logging
4. Run the shell until `exit`

Author: YSNRFD
Version: 1.0.0
"""

import argparse
import sys
from typing import List, Optional

from pysh import __version__
from pysh.core.config_loader import ConfigLoader
from pysh.exceptions import ConfigError
from pysh.logger import Logger, LogLevel, get_logger
from pysh.shell.shell import create_shell


def build_parser() -> argparse.ArgumentParser:
    """Command-line flags for the shell process."""
    parser = argparse.ArgumentParser(
        prog='pysh',
        description='A minimal interactive command shell.'
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='JSON configuration file'
    )
    parser.add_argument(
        '--log-level',
        choices=[level.name for level in LogLevel],
        type=str.upper,
        help='minimum level of log records to keep'
    )
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='also write log records to this file'
    )
    parser.add_argument(
        '--exit-on-eof',
        action='store_true',
        default=None,
        help='leave the shell when standard input is exhausted'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for pysh.

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)

    loader = ConfigLoader()
    try:
        if args.config:
            loader.load(args.config)
        if args.log_level is not None:
            loader.set('logging.level', args.log_level)
        if args.log_file is not None:
            loader.set('logging.log_file', args.log_file)
        if args.exit_on_eof is not None:
            loader.set('shell.exit_on_eof', args.exit_on_eof)
        loader.config.validate()
    except ConfigError as e:
        print(f"pysh: {e}", file=sys.stderr)
        return 1

    config = loader.config
    Logger.initialize(
        level=config.log_level,
        log_file=config.logging.log_file,
        console_output=config.logging.console_output
    )
    logger = get_logger('main')
    logger.info("Configuration loaded", context={'config': args.config or 'defaults'})

    shell = create_shell(config)

    try:
        return shell.run(sys.stdin, sys.stdout, sys.stderr)
    except KeyboardInterrupt:
        print("\n\nInterrupted", file=sys.stderr)
        logger.info("Interrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())
