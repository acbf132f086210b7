"""Tests for storing footprint calculations."""

import time
from unittest.mock import MagicMock, patch

from ecotrack.api.v1.schemas.result import PersistencePayload
from ecotrack.db.database import insert_calculation

PAYLOAD = PersistencePayload(
    transportCO2=0.0,
    foodCO2=2.5,
    housingCO2=0.13,
    consumptionCO2=0.0,
    totalCO2=2.63,
    rawAnswers={"housing": {"homeSize": 100.0, "heatingType": "heat-pump", "people": 8}},
    userId="user-3",
)


def _connection(record_id=7):
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.fetchone.return_value = {"id": record_id}
    return conn, cursor


class TestInsertCalculation:
    def test_commits_and_returns_id(self):
        conn, cursor = _connection()
        with patch("ecotrack.db.database.get_db_connection", return_value=conn):
            record_id = insert_calculation(PAYLOAD, deadline=time.monotonic() + 60)
        assert record_id == "7"
        conn.commit.assert_called_once()
        conn.rollback.assert_not_called()
        conn.close.assert_called_once()
        params = cursor.execute.call_args.args[1]
        assert params[0] == "user-3"
        assert params[5] == 2.63

    def test_past_deadline_rolls_back(self):
        conn, _ = _connection()
        with patch("ecotrack.db.database.get_db_connection", return_value=conn):
            record_id = insert_calculation(PAYLOAD, deadline=time.monotonic() - 1)
        assert record_id is None
        conn.commit.assert_not_called()
        conn.rollback.assert_called_once()
        conn.close.assert_called_once()

    def test_no_connection(self):
        with patch("ecotrack.db.database.get_db_connection", return_value=None):
            assert insert_calculation(PAYLOAD) is None

    def test_execute_error_rolls_back(self):
        conn, cursor = _connection()
        cursor.execute.side_effect = RuntimeError("relation does not exist")
        with patch("ecotrack.db.database.get_db_connection", return_value=conn):
            assert insert_calculation(PAYLOAD) is None
        conn.commit.assert_not_called()
        conn.rollback.assert_called_once()
        conn.close.assert_called_once()
