"""
Entry point for the token holder distributor.

Runs one distribution per invocation. Intended to be called by a scheduler
(cron, a serverless timer, ...) which is responsible for not overlapping runs.
"""
import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from distributor.cancellation import Cancellation
from distributor.chain.base import ChainClient
from distributor.chain.web3_client import Web3ChainClient
from distributor.config import DistributorSettings
from distributor.contracts.token_holder import TokenHolderContract
from distributor.errors import ConfigError, DistributionError, OrchestrationError
from distributor.models import Stage
from distributor.orchestrator import Orchestrator
from distributor.utils.web3 import AsyncWeb3Helper

logger = logging.getLogger(__name__)


async def handle_event(
    settings: DistributorSettings,
    event_time: str,
    *,
    client: Optional[ChainClient] = None,
    token_holder: Optional[TokenHolderContract] = None,
    cancellation: Optional[Cancellation] = None,
) -> str:
    """
    Handle one trigger event.

    Args:
        settings: Raw distributor settings
        event_time: Timestamp of the triggering event, echoed in the result
        client: Chain client; a Web3ChainClient for the settings' RPC url when omitted
        token_holder: Contract binding; built from the settings when omitted
        cancellation: Cancellation/deadline signal; built from settings when omitted

    Returns:
        Success message embedding event_time

    Raises:
        OrchestrationError: If configuration or any distribution stage fails
    """
    try:
        config = settings.resolve()
    except ConfigError as e:
        raise OrchestrationError(Stage.CONFIG, e) from e

    if client is None or token_holder is None:
        web3_helper = AsyncWeb3Helper.make_web3(settings.ethereum_json_rpc_url)
        if client is None:
            client = Web3ChainClient(web3_helper.web3)
        if token_holder is None:
            token_holder = TokenHolderContract(config.token_holder_contract_address, web3_helper)

    if cancellation is None:
        cancellation = Cancellation(deadline_seconds=settings.deadline_seconds)

    orchestrator = Orchestrator(client=client, token_holder=token_holder, config=config)
    return await orchestrator.run(event_time, cancellation)


def get_args(argv=None):
    parser = argparse.ArgumentParser(description="Token holder vault distributor")
    parser.add_argument(
        "--event-time",
        type=str,
        default=None,
        help="Timestamp of the triggering event (default: now, UTC ISO 8601)",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Abort the run after this many seconds (overrides DEADLINE_SECONDS)",
    )
    parser.add_argument("--env-file", type=str, default=None, help="Path to a .env file")
    return parser.parse_args(argv)


def main(argv=None):
    """Distributor entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    args = get_args(argv)
    event_time = args.event_time or datetime.now(timezone.utc).isoformat()

    logger.info("=" * 80)
    logger.info(f"TOKEN HOLDER DISTRIBUTION triggered at {event_time}")
    logger.info("=" * 80)

    try:
        settings = DistributorSettings.from_env(args.env_file)
        cancellation = None
        if args.deadline is not None:
            cancellation = Cancellation(deadline_seconds=args.deadline)
        message = asyncio.run(handle_event(settings, event_time, cancellation=cancellation))
    except DistributionError as e:
        logger.error(f"Distribution failed: {e}", exc_info=True)
        sys.exit(1)

    logger.info(message)
    print(message)


if __name__ == "__main__":
    main()
