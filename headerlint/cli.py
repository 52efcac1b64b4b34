from typing import List, Optional
import sys
import os
import argparse
from pathlib import Path
import logging

##################################################################################################
# Main
##################################################################################################

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='headerlint',
        description="Find source files whose copyright notice or SPDX license identifier "
                    "deviates from the one most of the tree uses.")
    parser.add_argument('dir', type=str, nargs='?', default='.', help='Directory to scan (default: current directory).')
    parser.add_argument('-w', dest='update', action='store_true', help='Update files in place.')
    parser.add_argument('-v', dest='verbose', action='store_true', help='Verbose.')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    if sys.platform.lower() == "win32":
        os.system('color')
        sys.stdout.reconfigure(encoding='utf-8') # type: ignore
        sys.stderr.reconfigure(encoding='utf-8') # type: ignore

    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    from headerlint.tasks.lint import LintConfig, run

    root = Path(args.dir)
    try:
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        run(LintConfig(root=root, update=args.update, verbose=args.verbose))
    except (OSError, ValueError) as e:
        # ValueError covers NoConsensusError and malformed ignore patterns
        logging.critical(e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
