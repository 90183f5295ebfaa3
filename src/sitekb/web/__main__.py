#!/usr/bin/env python3
"""Main entry point for the sitekb web service

Usage:
    python -m sitekb.web
    python -m sitekb.web --host 0.0.0.0 --port 8000
    python -m sitekb.web --reload --debug
"""

import argparse
import logging
import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def setup_logging(debug: bool = False) -> None:
    """Configure logging"""
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Suppress verbose logs from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    if debug:
        logging.getLogger("sitekb").setLevel(logging.DEBUG)
    else:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Start the sitekb web service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m sitekb.web                     # Start with default configuration
    python -m sitekb.web --port 8001         # Specify port
    python -m sitekb.web --reload --debug    # Development mode + debug mode

Environment:
    SITEKB_BASE_URL      Website to crawl
    SITEKB_STORAGE_DIR   Snapshot directory
    SITEKB_STORAGE_KEY   Snapshot key
        """,
    )

    parser.add_argument(
        "--host", default="127.0.0.1", help="Server host address (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port", type=int, default=8000, help="Server port (default: 8000)"
    )
    parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload (development mode)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (logs every skipped and fetched URL)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Log level (default: info)",
    )

    return parser.parse_args()


def main() -> None:
    """Main function"""
    args = parse_args()

    setup_logging(args.debug)
    logger = logging.getLogger(__name__)

    logger.info("Starting sitekb web service...")
    logger.info(f"Service URL: http://{args.host}:{args.port}")

    try:
        uvicorn.run(
            "sitekb.web.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=args.log_level,
        )
    except KeyboardInterrupt:
        logger.info("Service stopped")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
