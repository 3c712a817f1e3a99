"""Main entry point for the leaderboard service.

Modes:
- ``full``: serve the API and refresh the snapshot at start-up and hourly
- ``api_only``: serve the existing snapshot without refreshing
- ``refresh_once``: run a single refresh and exit
"""

import argparse
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

# Environment overrides must be in place before the config constants are read
load_dotenv()

from config.config import API_HOST, API_PORT
from data_pipeline.aggregator import AggregatorConfig
from data_pipeline.scheduler import RefreshScheduler
from utils.logging import get_logger, setup_logging

MODES = ("full", "api_only", "refresh_once")

logger = get_logger(__name__)


def main(
    config_path: Optional[str] = None,
    mode: str = "full",
    host: str = API_HOST,
    port: int = API_PORT,
) -> int:
    """Run the service in the given mode.

    Args:
        config_path: Path to YAML configuration file
        mode: One of ``full``, ``api_only``, ``refresh_once``
        host: API bind address
        port: API port

    Returns:
        Process exit code
    """
    logger.info("Starting LeetCode leaderboard service...")
    logger.info(f"Mode: {mode}")

    config = AggregatorConfig.from_yaml(config_path)
    if config_path:
        logger.info(f"Loaded configuration from {config_path}")

    if mode == "refresh_once":
        result = RefreshScheduler(config).run_now()
        logger.info(f"Refresh complete: {result.to_dict()}")
        return 0 if result.status == "ok" else 1

    import uvicorn
    from service.api.leaderboard_api import create_app

    app = create_app(config, run_scheduler=(mode == "full"))
    logger.info(f"Server is running at http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LeetCode leaderboard aggregator and API")
    parser.add_argument("--config", type=str, help="Path to YAML configuration file")
    parser.add_argument("--mode", type=str, default="full", choices=MODES,
                        help="Service mode")
    parser.add_argument("--host", type=str, default=API_HOST, help="API bind address")
    parser.add_argument("--port", type=int, default=API_PORT, help="API server port")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (defaults to $LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", type=str, default=None, help="Optional log file")
    return parser


def cli(argv: Optional[Sequence[str]] = None) -> int:
    """Console script entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)
    return main(config_path=args.config, mode=args.mode, host=args.host, port=args.port)


if __name__ == "__main__":
    sys.exit(cli())
