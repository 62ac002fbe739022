import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from models.log import Log

logger = logging.getLogger(__name__)

def write_log(db: Session, *, action, resource, status="SUCCESS", user_id=None, session_id=None, ip=None, meta=None):
    entry = Log(
        user_id=user_id, session_id=session_id, action=action, resource=resource,
        status=status, ip=ip, meta=meta or {},
    )
    db.add(entry)
    try:
        db.commit()
    except SQLAlchemyError as e:
        # An audit row must never undo the business write that preceded it
        db.rollback()
        logger.error(f"Audit log write failed for {action}: {e}")
