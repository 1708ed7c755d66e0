"""Weighted fundamentals score for a stock, out of 10.

Fundamentals arrive as scraped string tables (``"12.4%"``, ``"(1.05)"``) so
every figure goes through :func:`parse_figure` before it is averaged.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Sequence

MAX_SCORE = 10

_NON_NUMERIC = re.compile(r"[^\d.-]")
LEADING_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)")


@dataclass(frozen=True)
class ScoreReason:
    message: str
    favorable: bool


@dataclass(frozen=True)
class StockScore:
    symbol: str
    score: int
    reasons: List[ScoreReason] = field(default_factory=list)


def parse_figure(raw: Any) -> Optional[float]:
    """Parse a scraped figure; blanks count as zero, garbage as missing."""

    if isinstance(raw, (int, float)):
        return float(raw)
    cleaned = _NON_NUMERIC.sub("", str(raw or "")) or "0"
    match = LEADING_NUMBER.match(cleaned)
    return float(match.group()) if match else None


def _figures(rows: Iterable[Mapping[str, Any]], key: str) -> List[float]:
    values = (parse_figure(row.get(key)) for row in rows)
    return [value for value in values if value is not None]


def _average(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _tiered(strong: bool, moderate: bool) -> int:
    if strong:
        return 2
    if moderate:
        return 1
    return 0


def score_stock(
    symbol: str,
    *,
    ratios: Sequence[Mapping[str, Any]] = (),
    payouts: Sequence[Mapping[str, Any]] = (),
    financials: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
) -> StockScore:
    score = 0
    reasons: List[ScoreReason] = []

    eps_growth = _figures(ratios, "EPS Growth (%)")
    if eps_growth:
        avg = _average(eps_growth)
        points = _tiered(avg > 20, avg > 5)
        score += points
        reasons.append(
            ScoreReason(
                {2: "Strong EPS growth", 1: "Moderate EPS growth"}.get(points, "Low EPS growth"),
                points > 0,
            )
        )

    margins = _figures(ratios, "Net Profit Margin (%)")
    if margins:
        avg = _average(margins)
        points = _tiered(avg > 15, avg > 8)
        score += points
        reasons.append(
            ScoreReason(
                {2: "High profit margin", 1: "Moderate profit margin"}.get(points, "Low profit margin"),
                points > 0,
            )
        )

    pegs = _figures(ratios, "PEG")
    if pegs:
        avg = _average(pegs)
        points = _tiered(avg < 1, avg < 2)
        score += points
        reasons.append(
            ScoreReason(
                {2: "Attractive PEG ratio (<1)", 1: "Fair PEG ratio (<2)"}.get(points, "High PEG ratio"),
                points > 0,
            )
        )

    if payouts:
        count = len(payouts)
        points = _tiered(count >= 4, count >= 2)
        score += points
        reasons.append(
            ScoreReason(
                {2: "Consistent dividend payouts", 1: "Some dividend payouts"}.get(points, "Few or no dividends"),
                points > 0,
            )
        )

    annual = list((financials or {}).get("annual") or [])
    if len(annual) >= 2:
        eps = _figures(annual, "EPS")
        if len(eps) >= 2 and eps[-1] > eps[-2]:
            score += 1
            reasons.append(ScoreReason("Recent EPS growth", True))

    return StockScore(symbol=symbol, score=min(score, MAX_SCORE), reasons=reasons)


__all__ = ["LEADING_NUMBER", "MAX_SCORE", "ScoreReason", "StockScore", "parse_figure", "score_stock"]
