from __future__ import annotations

from typing import Sequence

from ..core.enums import RiskLevel
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import BradfordThreshold
from .repository import BradfordThresholdRepository


class MySQLBradfordThresholdRepository(BradfordThresholdRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, *, company_id: int) -> Sequence[BradfordThreshold]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT min_score, risk_level, action_required
                FROM bradford_factor_thresholds
                WHERE company_id=%s AND is_active=1
                ORDER BY min_score
                """,
                (int(company_id),),
            )
            return [
                BradfordThreshold(
                    min_score=int(r["min_score"]),
                    risk_level=RiskLevel(r["risk_level"]),
                    action_required=r.get("action_required"),
                )
                for r in fetchall(cur)
            ]
