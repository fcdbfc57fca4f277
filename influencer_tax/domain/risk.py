"""Compliance risk classification used to prioritise audit attention"""

from typing import List, Optional

from influencer_tax.domain.models import Influencer, RiskAssessment

DEFAULT_COMPLIANCE_SCORE = 50

# Medium band is [40, 70)
HIGH_RISK_BELOW = 40
LOW_RISK_FROM = 70


def classify_compliance_risk(score: Optional[float]) -> str:
    """
    Map a 0-100 compliance score to a risk band.

    Score bands:
    - below 40: High
    - 40 - 69:  Medium
    - 70+:      Low

    A missing score is treated as 50.
    """
    if score is None:
        score = DEFAULT_COMPLIANCE_SCORE

    if score < HIGH_RISK_BELOW:
        return "High"
    elif score < LOW_RISK_FROM:
        return "Medium"
    else:
        return "Low"


def assess_audit_risk(influencers: List[Influencer]) -> List[RiskAssessment]:
    """Pair each influencer with its effective score and risk band, preserving order"""
    assessments = []
    for influencer in influencers:
        score = (
            influencer.compliance_score
            if influencer.compliance_score is not None
            else DEFAULT_COMPLIANCE_SCORE
        )
        assessments.append(
            RiskAssessment(
                influencer=influencer,
                score=score,
                risk=classify_compliance_risk(score),
            )
        )
    return assessments
