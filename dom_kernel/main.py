#!/usr/bin/env python3
"""
DOM Kernel - Main Entry Point

Parses an HTML file into a Tree and prints query results or the tree layout.
"""

import argparse
import logging
import sys
from typing import List, Optional

from dom_kernel import __version__
from dom_kernel.dom.builder import parse_document
from dom_kernel.utils.config import Config
from dom_kernel.utils.logging import PerformanceLogger, get_default_log_file, setup_logging

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_UNREADABLE = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="DOM Kernel - query and inspect HTML node trees")

    parser.add_argument("file", help="HTML file to load")
    parser.add_argument("--select", metavar="CSS", help="Print the outer HTML of elements matching a CSS selector")
    parser.add_argument("--id", dest="element_id", metavar="ID", help="Print the outer HTML of the element with this id")
    parser.add_argument("--tree", action="store_true", help="Print the tree layout (default)")
    parser.add_argument("--text", action="store_true", help="Print text content instead of HTML")
    parser.add_argument("--config", metavar="PATH", default=None, help="JSON configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"DOM Kernel {__version__}")

    return parser.parse_args(argv)


def configure_logging(config: Config, debug: bool) -> logging.Logger:
    """Configure the dom_kernel logger from the ``logging`` config section."""
    log_file = get_default_log_file() if config.get("logging.log_to_file", False) else None
    return setup_logging(
        log_file=log_file,
        console_level="DEBUG" if debug else config.get("logging.console_level", "WARNING"),
        file_level=config.get("logging.file_level", "DEBUG"),
        colored=sys.stderr.isatty(),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    args = parse_args(argv)

    config = Config(args.config)
    logger = configure_logging(config, args.debug)
    perf = PerformanceLogger(logger, "cli")

    try:
        with open(args.file, "r", encoding="utf-8", errors="replace") as f:
            markup = f.read()
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return EXIT_UNREADABLE

    perf.start("parse")
    tree = parse_document(markup, config=config)
    perf.end("parse")

    if args.select or args.element_id:
        if args.element_id:
            found = tree.lookup(args.element_id)
            matches = [found] if found is not None else []
        else:
            perf.start("query")
            matches = tree.query_selector_all(args.select)
            perf.end("query")

        for element in matches:
            print(element.text_content if args.text else element.outer_html)

        if not matches:
            logger.info("No matching elements")
            return EXIT_NO_MATCH
        return EXIT_OK

    print(tree.debug_structure())
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
