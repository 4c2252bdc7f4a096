import time
import logging
import signal
import sys
import threading
import uuid
import argparse

from core.config_loader import load_config
from core.matching.batch_runner import MatchBatchRunner
from core.matching.exceptions import CalculationCancelledError, MatchingError
from core.matching.models import Actor, CalculationProgress
from database.database import create_db_engine, create_session_factory
from database.init_db import init_db
from database.uow import matching_uow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Set on SIGINT/SIGTERM; the bid runner stops before the next requirement
cancel_event = threading.Event()


def signal_handler(sig, frame):
    logger.info("Shutdown signal received, stopping after the current requirement")
    cancel_event.set()


def log_progress(progress: CalculationProgress):
    logger.info(f"Progress: {progress.current}/{progress.total} requirements")


def build_session_factory(config):
    engine = create_db_engine(config.database.url)
    return engine, create_session_factory(engine)


def run_calculate_requirement(config, session_factory, requirement_id, actor):
    step_start = time.time()
    logger.info(f"=== Calculating matches for requirement {requirement_id} ===")

    with matching_uow(session_factory) as repo:
        runner = MatchBatchRunner(repo, config.matching)
        result = runner.calculate_match(requirement_id, actor)

    step_elapsed = time.time() - step_start
    logger.info(
        f"Requirement {requirement_id}: {result.matches_produced} matches "
        f"from {result.total_candidates} candidates in {step_elapsed:.2f}s"
    )
    return result


def run_calculate_bid(config, session_factory, bid_id, actor, force=False):
    step_start = time.time()
    logger.info("=" * 60)
    logger.info(f"CALCULATING MATCHES FOR BID {bid_id}{' (forced)' if force else ''}")
    logger.info("=" * 60)

    with matching_uow(session_factory) as repo:
        runner = MatchBatchRunner(repo, config.matching)

        if not force and runner.check_existing_matches(bid_id):
            logger.info("Bid already has matches; they will be refreshed in place")

        result = runner.calculate_match_for_solicitation(
            bid_id,
            actor,
            force_recalculate=force,
            on_progress=log_progress,
            cancel_event=cancel_event,
        )

    step_elapsed = time.time() - step_start
    logger.info(
        f"Bid {bid_id}: {result.total_matches} matches across "
        f"{result.total_requirements} requirements in {step_elapsed:.2f}s"
    )
    return result


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="BidMatch Main Driver")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (default: config.yaml)')
    parser.add_argument('--actor-id', type=uuid.UUID, default=None,
                        help='User id of the acting user')
    parser.add_argument('--actor-role', type=str, default='admin',
                        help='Role of the acting user (default: admin)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help='Create database tables')

    req_parser = subparsers.add_parser('calculate-requirement',
                                       help='Score all active users against one requirement')
    req_parser.add_argument('requirement_id', type=uuid.UUID)

    bid_parser = subparsers.add_parser('calculate-bid',
                                       help='Score all active users against every requirement of a bid')
    bid_parser.add_argument('bid_id', type=uuid.UUID)
    bid_parser.add_argument('--force', action='store_true',
                            help='Delete all existing matches of the bid first')

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = load_config(args.config)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    engine, session_factory = build_session_factory(config)

    if args.command == 'init-db':
        init_db(bind=engine)
        return 0

    actor = Actor(user_id=args.actor_id or uuid.uuid4(), role=args.actor_role.strip().lower())
    logger.info(f"Main driver running '{args.command}' as {actor.role}")

    try:
        if args.command == 'calculate-requirement':
            run_calculate_requirement(config, session_factory, args.requirement_id, actor)
        elif args.command == 'calculate-bid':
            run_calculate_bid(config, session_factory, args.bid_id, actor, force=args.force)
    except CalculationCancelledError as e:
        logger.warning(f"{e.message}; committed requirements are kept")
        return 130
    except MatchingError as e:
        logger.error(f"{e.kind}: {e.message}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
