# Backend/evaluator/services/share_service.py
import logging
import os
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from evaluator.config import settings
from evaluator.errors import NotFoundError
from evaluator.models import Candidate, Ranking
from evaluator.schemas.candidate import ShareLink

logger = logging.getLogger(__name__)


def create_share_token() -> str:
    """
    Generates a secure random, URL-safe token.

    ``SHARE_TOKEN_BYTES`` random bytes (at least 16, i.e. 128 bits) are
    hex-encoded so the token can be used directly in a link.
    """
    return os.urandom(settings.SHARE_TOKEN_BYTES).hex()


def build_share_url(token: str) -> str:
    return f"{settings.FRONTEND_BASE_URL.rstrip('/')}/share/{token}"


def issue_share_token(db: Session, candidate_id: int) -> ShareLink:
    """
    Issue a new share token for a ranked candidate.

    Only one token is stored per candidate: issuing again overwrites the
    previous token, which then stops resolving. Tokens do not expire.
    """
    if db.get(Candidate, candidate_id) is None:
        raise NotFoundError(f"Candidate {candidate_id} not found")

    ranking = db.query(Ranking).filter(Ranking.candidate_id == candidate_id).one_or_none()
    if ranking is None:
        raise NotFoundError(f"Candidate {candidate_id} has no ranking to share")

    token = create_share_token()
    ranking.share_token = token
    ranking.is_shared = True
    ranking.last_shared_at = datetime.now(timezone.utc)
    db.commit()

    logger.info("Issued share link for candidate %s", candidate_id)
    return ShareLink(share_token=token, share_url=build_share_url(token))


def resolve_share_token(db: Session, token: str) -> int:
    """Return the candidate id a share token grants access to."""
    candidate_id = (
        db.query(Ranking.candidate_id)
        .filter(Ranking.share_token == token)
        .scalar()
    )
    if candidate_id is None:
        raise NotFoundError("Share token not found")
    return candidate_id
