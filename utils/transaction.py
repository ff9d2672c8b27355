from contextlib import contextmanager
from flask import current_app
from models import db
from utils.errors import LMSError, InternalError


@contextmanager
def transaction():
    """Scoped unit of work on the request session.

    Commits when the block exits cleanly. Any exception rolls back every
    write made inside the block. Domain errors are re-raised unchanged,
    anything else surfaces as InternalError. Commit and rollback both hand
    the connection back to the pool.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except LMSError:
        session.rollback()
        raise
    except Exception as e:
        session.rollback()
        current_app.logger.exception("Transaction rolled back")
        raise InternalError("Internal server error") from e


def execute_transaction(operations):
    """Run callables in order inside one transaction; returns their results."""
    with transaction() as session:
        return [operation(session) for operation in operations]
