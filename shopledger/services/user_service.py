import logging
from datetime import datetime, timedelta
from typing import cast

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shopledger.core.constants import NEW_USER_WINDOW_DAYS
from shopledger.core.dates import utc_now
from shopledger.core.errors import ConflictError, PersistenceError
from shopledger.models.user_profile import UserProfile

logger = logging.getLogger(__name__)


def list_users(db: Session, search: str | None = None) -> list[UserProfile]:
    stmt = select(UserProfile).order_by(UserProfile.created_at.desc(), UserProfile.id.desc())
    search = (search or "").strip()
    if search:
        pattern = "%{}%".format(search)
        stmt = stmt.where(
            or_(
                UserProfile.full_name.ilike(pattern),
                UserProfile.email.ilike(pattern),
            )
        )
    return cast(list[UserProfile], list(db.execute(stmt).scalars().all()))


def create_user(db: Session, payload) -> UserProfile:
    user = UserProfile(
        full_name=payload.full_name.strip(),
        email=payload.email.strip().lower(),
        phone=payload.phone,
        role=payload.role,
        created_at=utc_now(),
    )
    try:
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("A user with this email already exists.") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating user %s", payload.email)
        raise PersistenceError("Failed to create user") from exc
    db.refresh(user)
    return user


def user_stats(db: Session, now: datetime | None = None) -> dict:
    if now is None:
        now = utc_now()
    # Stored timestamps come back naive (UTC) from SQLite.
    cutoff = (now - timedelta(days=NEW_USER_WINDOW_DAYS)).replace(tzinfo=None)
    total = db.execute(select(func.count(UserProfile.id))).scalar_one()
    recent = db.execute(
        select(func.count(UserProfile.id)).where(UserProfile.created_at >= cutoff)
    ).scalar_one()
    return {"total_users": total, "new_this_week": recent}
