"""
Main entrypoint for the Half Shekel application.
Usage: python run.py [api|price]
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

USAGE = """Usage: python run.py [api|price]
  api   - Start the Half Shekel API
  price - Fetch live market data once and print the result"""


def setup_logging() -> None:
    """
    Set up consistent logging configuration for the application.
    Uses environment variables for configuration.
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_format = os.getenv(
        "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    log_file = os.getenv("LOG_FILE", "half_shekel.log")
    log_to_file = os.getenv("LOG_TO_FILE", "false").lower() == "true"

    numeric_level = getattr(logging, log_level, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_to_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )


logger = logging.getLogger(__name__)


async def print_price() -> None:
    """Compute the half shekel value once and print it as JSON."""
    from half_shekel.api.models import HalfShekelResponse
    from half_shekel.pricing.calculator import HalfShekelPricer

    pricing = await HalfShekelPricer().price()
    print(HalfShekelResponse.from_pricing(pricing).model_dump_json(by_alias=True, indent=2))


async def main():
    if len(sys.argv) != 2:
        print(USAGE)
        sys.exit(1)

    command = sys.argv[1].lower()

    setup_logging()

    if command == "api":
        from half_shekel.api.service import main as run_service

        logger.info("Starting API service...")
    elif command == "price":
        run_service = print_price
    else:
        print(f"Unknown command: {command}")
        print(USAGE)
        sys.exit(1)
    await run_service()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        sys.exit(0)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)
