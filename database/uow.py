import contextlib
import logging

from database.database import get_session_factory
from database.repository import MatchingRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def matching_uow(session_factory=None):
    """Per-unit-of-work transaction scope.

    Yields a MatchingRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes. Without a session_factory the
    process-wide one for DATABASE_URL is used.

    Usage:
        with matching_uow(session_factory) as repo:
            runner = MatchBatchRunner(repo, config.matching)
            runner.calculate_match(requirement_id, actor)
        # commit happens automatically on successful exit
    """
    session = (session_factory or get_session_factory())()
    try:
        yield MatchingRepository(session)
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("Unit of work rolled back")
        raise
    finally:
        session.close()
