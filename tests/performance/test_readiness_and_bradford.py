from decimal import Decimal

import pytest

from src.hris_system.hris_system.core.enums import AbsenceTrend, ReadinessTrend, RiskLevel
from src.hris_system.hris_system.core.exceptions import ValidationError
from src.hris_system.hris_system.leave.model import BradfordThreshold
from src.hris_system.hris_system.leave.service import BradfordService, bradford_score
from src.hris_system.hris_system.succession.readiness import readiness_trend


@pytest.mark.parametrize(
    "scores,trend,delta",
    [
        ([60, 70], ReadinessTrend.IMPROVING, "10"),
        ([70, 69], ReadinessTrend.STABLE, "-1"),
        ([50, 70, 60], ReadinessTrend.DECLINING, "-10"),
        ([65], ReadinessTrend.STABLE, "0"),
    ],
)
def test_readiness_trend(scores, trend, delta):
    result = readiness_trend(scores)

    assert result.trend == trend
    assert result.delta == Decimal(delta)


def test_readiness_requires_scores():
    with pytest.raises(ValidationError):
        readiness_trend([])


class FakeThresholds:
    def __init__(self, by_company=None):
        self.by_company = by_company or {}

    def list_active(self, *, company_id):
        return self.by_company.get(company_id, [])


def test_bradford_score_formula():
    assert bradford_score(3, 10) == 90
    assert bradford_score(1, 10) == 10
    assert bradford_score(10, 10) == 1000


def test_default_thresholds_apply_without_company_config():
    result = BradfordService(FakeThresholds()).score(spells=3, days=10, company_id=7)

    assert result.score == 90
    assert result.risk_level == RiskLevel.MEDIUM
    assert result.trend is None


def test_company_thresholds_and_trend():
    thresholds = FakeThresholds(
        {
            1: [
                BradfordThreshold(min_score=0, risk_level=RiskLevel.LOW),
                BradfordThreshold(min_score=51, risk_level=RiskLevel.MEDIUM, action_required="Talk"),
                BradfordThreshold(min_score=201, risk_level=RiskLevel.HIGH, action_required="Review"),
                BradfordThreshold(min_score=500, risk_level=RiskLevel.CRITICAL, action_required="Warning"),
            ]
        }
    )
    service = BradfordService(thresholds)

    low = service.score(spells=2, days=12, company_id=1)
    critical = service.score(spells=5, days=20, company_id=1, previous_score=600)

    assert low.risk_level == RiskLevel.LOW
    assert critical.score == 500
    assert critical.risk_level == RiskLevel.CRITICAL
    assert critical.action_required == "Warning"
    assert critical.trend == AbsenceTrend.IMPROVING
    assert critical.to_dict()["riskLevel"] == "critical"


@pytest.mark.parametrize("spells,days", [(0, 3), (4, 2), (-1, 5), ("x", 5)])
def test_bradford_rejects_inconsistent_input(spells, days):
    with pytest.raises(ValidationError):
        BradfordService(FakeThresholds()).score(spells=spells, days=days)
