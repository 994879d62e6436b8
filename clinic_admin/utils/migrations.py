import logging
import os
import sys

from sqlalchemy import text

logger = logging.getLogger(__name__)

ADVISORY_LOCK_KEY = 4117011

ALEMBIC_INI_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "alembic.ini")


def _get_head_revision() -> str:
    from alembic.config import Config
    from alembic.script import ScriptDirectory

    cfg = Config(ALEMBIC_INI_PATH)
    script = ScriptDirectory.from_config(cfg)
    head = script.get_current_head()
    return head or "unknown"


def _get_current_revision(engine) -> str:
    try:
        with engine.connect() as conn:
            result = conn.execute(text("SELECT version_num FROM alembic_version LIMIT 1"))
            row = result.fetchone()
            return row[0] if row else "none"
    except Exception:
        return "unknown"


def get_migration_state(engine) -> dict:
    current = _get_current_revision(engine)
    head = _get_head_revision()
    return {
        "current_revision": current,
        "head_revision": head,
        "migration_pending": current != head,
    }


def _upgrade_to_head(engine) -> None:
    from alembic import command
    from alembic.config import Config

    cfg = Config(ALEMBIC_INI_PATH)
    cfg.set_main_option("sqlalchemy.url", engine.url.render_as_string(hide_password=False))
    command.upgrade(cfg, "head")


def run_migrations_if_enabled(engine) -> None:
    """Upgrade to head on startup when RUN_MIGRATIONS_ON_STARTUP is true.

    Replicas serialise on a PostgreSQL advisory lock. A failed upgrade
    stops the process.
    """
    from ..config import get_settings

    if get_settings().run_migrations_on_startup.lower() != "true":
        logger.info("Startup migrations disabled")
        return

    raw_conn = engine.raw_connection()
    try:
        cursor = raw_conn.cursor()
        cursor.execute("SELECT pg_advisory_lock(%s)", (ADVISORY_LOCK_KEY,))
        logger.info(f"Holding migration lock {ADVISORY_LOCK_KEY}; upgrading clinic schema to head")
        try:
            _upgrade_to_head(engine)
        finally:
            cursor.execute("SELECT pg_advisory_unlock(%s)", (ADVISORY_LOCK_KEY,))
        logger.info("Clinic schema is at head")
    except Exception:
        logger.exception("Startup migration failed")
        sys.exit(1)
    finally:
        raw_conn.close()
