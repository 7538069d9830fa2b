"""Command line entry point for vidinfo."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .core import InfoClient, VidInfoError
from .utils import Config, setup_logging
from .version import __version__

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vidinfo", description="Print metadata and formats of a YouTube video")
    parser.add_argument("url", help="Video URL or id")
    parser.add_argument("--full", action="store_true", help="Decipher URLs and merge DASH/HLS formats")
    parser.add_argument("--lang", default=None, help="Language tag (default from settings, else 'en')")
    parser.add_argument("--config", type=Path, default=None, help="Settings JSON file")
    parser.add_argument("--formats", action="store_true", help="Only print the format list")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)
    config = Config(args.config)
    options = config.options(lang=args.lang, debug=args.debug or None)

    logger.debug(f"vidinfo v{__version__}, lang={options.lang}")
    with InfoClient.from_config(config) as client:
        fetch = client.get_full_info if args.full else client.get_basic_info
        try:
            info = fetch(args.url, options).result()
        except VidInfoError as e:
            logger.error(f"{type(e).__name__}: {e}")
            return 1

    data = info.formats if args.formats else info.to_dict()
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
