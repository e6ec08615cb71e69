import logging
import sys
from typing import Optional, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def check_connection(engine: Optional[Engine] = None) -> Tuple[bool, str]:
    """
    Open a connection and ask the database for its current time.
    Returns (ok, detail) where detail is the timestamp or the error message.
    """
    engine = engine or default_engine
    try:
        with engine.connect() as connection:
            now = connection.execute(text("SELECT CURRENT_TIMESTAMP")).scalar_one()
    except SQLAlchemyError as e:
        return False, str(e)
    return True, str(now)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger.info(f"Checking database connection ({default_engine.url.render_as_string(hide_password=True)})")
    ok, detail = check_connection()
    if not ok:
        logger.error(f"Connection failed: {detail}")
        sys.exit(1)
    logger.info(f"Connected successfully. Database time: {detail}")


if __name__ == "__main__":
    main()
