# ecotrack/db/database.py
from typing import List, Optional
import time
import psycopg
from psycopg.rows import dict_row
from psycopg.conninfo import make_conninfo
from psycopg.types.json import Jsonb
from ecotrack.core.config import settings
from ecotrack.api.v1.schemas.result import HistoryItem, HistoryStats, PersistencePayload
import logging

logger = logging.getLogger(__name__)

if settings.DATABASE_URL:
    DATABASE_URL = settings.DATABASE_URL
elif settings.DB_HOST and settings.DB_USER and settings.DB_PASSWORD and settings.DB_NAME:
    DATABASE_URL = make_conninfo(
        host=settings.DB_HOST,
        user=settings.DB_USER,
        password=settings.DB_PASSWORD,
        dbname=settings.DB_NAME,
        port=settings.DB_PORT,
        sslmode=settings.DB_SSLMODE
    )
else:
    DATABASE_URL = None


class DatabaseUnavailableError(RuntimeError):
    pass


def _masked(dsn: str) -> str:
    # Hide the password when logging the connection string
    idx = dsn.find("password=")
    return dsn if idx < 0 else dsn[:idx + 9] + "********..."


def get_db_connection():
    if not DATABASE_URL:
        logger.error("Database connection attempt failed: DATABASE_URL is not configured.")
        return None
    try:
        logger.info(f"Connecting to the database with DSN (partial): {_masked(DATABASE_URL)}")
        conn = psycopg.connect(DATABASE_URL, connect_timeout=10, row_factory=dict_row)
        return conn
    except psycopg.OperationalError as e:
        logger.error(f"Operational error while connecting to the database: {e}")
        return None
    except Exception as e:
        logger.error(f"Unexpected error while connecting to the database: {e}")
        return None


def insert_calculation(payload: PersistencePayload, deadline: Optional[float] = None) -> Optional[str]:
    """
    Stores a computed footprint. Returns the new record id, or None if it could not be saved.

    `deadline` is a time.monotonic() value. Once it has passed the insert is rolled back
    instead of committed, so a caller that already gave up does not get a stray row.
    """
    conn = get_db_connection()
    if conn is None:
        return None

    sql = """
        INSERT INTO footprint_calculations (
            user_id,
            transport_co2,
            food_co2,
            housing_co2,
            consumption_co2,
            total_co2,
            raw_answers
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s)
        RETURNING id;
    """
    try:
        with conn.cursor() as cur:
            cur.execute(sql, (
                payload.userId,
                payload.transportCO2,
                payload.foodCO2,
                payload.housingCO2,
                payload.consumptionCO2,
                payload.totalCO2,
                Jsonb(payload.rawAnswers),
            ))
            row = cur.fetchone()
            if deadline is not None and time.monotonic() > deadline:
                logger.warning(f"Footprint save for {payload.userId or 'anonymous'} passed its deadline; rolled back.")
                conn.rollback()
                return None
            conn.commit()
        record_id = str(row["id"])
        logger.info(f"Footprint calculation {record_id} saved for user {payload.userId or 'anonymous'}.")
        return record_id
    except Exception as e:
        logger.error(f"Error saving footprint calculation for {payload.userId or 'anonymous'}: {e}")
        conn.rollback()
        return None
    finally:
        conn.close()


def fetch_history(user_id: str, limit: int = 10) -> List[HistoryItem]:
    conn = get_db_connection()
    if conn is None:
        raise DatabaseUnavailableError("Database is not available.")
    try:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT id, created_at, transport_co2, food_co2, housing_co2, consumption_co2, total_co2
                FROM footprint_calculations
                WHERE user_id = %s
                ORDER BY created_at DESC
                LIMIT %s;
                """,
                (user_id, limit),
            )
            rows = cur.fetchall()
        return [HistoryItem(**{**row, "id": str(row["id"])}) for row in rows]
    finally:
        conn.close()


def fetch_stats(user_id: str) -> HistoryStats:
    conn = get_db_connection()
    if conn is None:
        raise DatabaseUnavailableError("Database is not available.")
    try:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT COUNT(*) AS count, AVG(total_co2) AS average, MAX(created_at) AS last
                FROM footprint_calculations
                WHERE user_id = %s;
                """,
                (user_id,),
            )
            row = cur.fetchone()
        average = round(float(row["average"]), 2) if row["average"] is not None else None
        return HistoryStats(count=row["count"], average=average, last=row["last"])
    finally:
        conn.close()
