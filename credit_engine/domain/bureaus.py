"""
Bureau score simulator.

When a report comes from a single bureau, estimate the other two. Bureau
scores commonly differ by 10-50 points because creditors report on
different schedules, not every creditor reports to every bureau, and the
scoring models vary slightly.
"""

import logging
import math
import random
from typing import List, Optional

from credit_engine.domain.models import BUREAUS, Bureau, BureauScore, Confidence
from credit_engine.domain.scoring import MAX_SCORE, MIN_SCORE

logger = logging.getLogger(__name__)

# Experian tends to run slightly high, Equifax slightly low
BUREAU_BIAS = {
    "experian": 5,
    "transunion": 0,
    "equifax": -5,
}


def base_variance(account_count: int) -> float:
    """More accounts means more room for reporting differences, capped at 30"""
    return min(30, 10 + account_count * 0.5)


def simulated_confidence(account_count: int) -> Confidence:
    if account_count < 3:
        return "low"
    if account_count > 10:
        return "high"
    return "medium"


def simulate_missing_bureau_scores(
    known_bureau: Bureau,
    known_score: int,
    account_count: int = 0,
    rng: Optional[random.Random] = None,
) -> List[BureauScore]:
    """
    Return all three bureau scores: the known one plus two estimates.

    Each estimate is ``known_score + bias + U(-variance, +variance)``,
    rounded and clamped to 300-850. Pass a seeded ``rng`` for repeatable
    output.
    """
    if known_bureau not in BUREAU_BIAS:
        raise ValueError(f"Unknown bureau: {known_bureau}")

    rng = rng or random.Random()
    variance_range = base_variance(account_count)
    results: List[BureauScore] = []

    for bureau in BUREAUS:
        if bureau == known_bureau:
            results.append(
                BureauScore(
                    bureau=bureau,
                    score=known_score,
                    is_simulated=False,
                    confidence="high",
                    notes="Actual score from credit report",
                )
            )
            continue

        bias = BUREAU_BIAS[bureau] - BUREAU_BIAS[known_bureau]
        variance = (rng.random() - 0.5) * variance_range * 2

        simulated = math.floor(known_score + bias + variance + 0.5)
        simulated = max(MIN_SCORE, min(MAX_SCORE, simulated))

        results.append(
            BureauScore(
                bureau=bureau,
                score=simulated,
                is_simulated=True,
                confidence=simulated_confidence(account_count),
                notes=(
                    f"Estimated based on {known_bureau} score with "
                    f"{abs(math.floor(variance + 0.5))}pt variance"
                ),
            )
        )

    logger.debug(
        "Simulated bureau scores",
        extra={"known_bureau": known_bureau, "known_score": known_score, "account_count": account_count},
    )
    return results
