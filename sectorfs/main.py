#!/usr/bin/env python3
"""
SectorFS - A virtual file system for sector-addressed storage

This is the main entry point for SectorFS.

Author: YSNRFD
Version: 1.0.0
"""

import argparse
import sys
from typing import List, Optional

from sectorfs.core.bootloader import Bootloader
from sectorfs.shell.shell import Shell


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sectorfs',
        description='Interactive interpreter for a sector-backed virtual file system.'
    )
    parser.add_argument(
        '-c', '--config',
        default='sectorfs.json',
        help='configuration file (defaults are used if it does not exist)'
    )
    parser.add_argument(
        '-s', '--script',
        help='run the commands in this file instead of starting the prompt'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for SectorFS.

    Boot sequence:
    1. Load configuration
    2. Initialize logging
    3. Check the storage medium and index
    4. Run the interpreter
    5. Shutdown
    """
    args = build_parser().parse_args(argv)

    bootloader = Bootloader(args.config)
    result = bootloader.boot()

    if not result.success:
        print(f"Boot failed at stage {result.stage.name}")
        print(f"Error: {result.error}")
        return 1

    print(result.message)

    shell = Shell(bootloader.get_vfs())
    exit_code = 0

    try:
        if args.script:
            with open(args.script, 'r', encoding='utf-8') as f:
                exit_code = shell.run_script(f.read())
        else:
            shell.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted")
    except OSError as e:
        print(f"Cannot read script: {e}")
        exit_code = 1
    finally:
        bootloader.shutdown()

    return exit_code


if __name__ == '__main__':
    sys.exit(main())
