"""
Monthly and yearly insight messages.

A fixed decision table over AggregateMetrics: each metric falls into one
tier and each tier has one message template. No randomness, so the same
metrics always produce the same messages in the same order.
"""
from typing import List

from services.aggregates import AggregateMetrics

MAX_MONTHLY_INSIGHTS = 3
MAX_YEARLY_INSIGHTS = 2

# Monthly volume tiers (minutes)
INCREDIBLE_MONTH_MINUTES = 600
SOLID_MONTH_MINUTES = 300

# Effort / confidence tiers (1-5 averages)
HIGH_EFFORT = 4.5
GOOD_EFFORT = 4.0
HIGH_CONFIDENCE = 4.0
LOW_RATING = 3.5

# Recovery tiers
NORMAL_SORE_DAYS = 3
MOSTLY_GREAT_SHARE = 0.6

# Yearly tiers
ELITE_YEAR_HOURS = 100
MULTI_SPORT_COUNT = 3

EMPTY_MONTH = "No entries this month yet. Start logging to see insights!"
EMPTY_YEAR = "No entries this year yet. Start logging your training!"


def _volume_insight(total: int) -> str:
    if total >= INCREDIBLE_MONTH_MINUTES:
        return f"🔥 Incredible work this month — you put in {total} minutes of training. That kind of commitment is how champions are made!"
    if total >= SOLID_MONTH_MINUTES:
        return f"💪 Solid month! You trained for {total} minutes total. Keep building on that consistency."
    return f"📈 You logged {total} minutes this month. Every session counts — even small ones add up over time!"


def _effort_confidence_insight(effort: float, conf: float) -> str:
    if effort >= HIGH_EFFORT and conf >= HIGH_CONFIDENCE:
        return f"⚡ Your average effort was {effort:.1f}/5 and confidence {conf:.1f}/5 — you're showing up with full energy and believing in yourself!"
    if effort >= GOOD_EFFORT and conf < LOW_RATING:
        return f"🎯 You're working hard (avg effort {effort:.1f}/5), but confidence averaged {conf:.1f}/5. Remember: hard work builds confidence over time — trust the process!"
    if conf >= HIGH_CONFIDENCE and effort < LOW_RATING:
        return f"😎 Great confidence this month ({conf:.1f}/5)! Try cranking up the effort a bit — you clearly believe in yourself, now push the gas pedal!"
    return f"📊 This month averaged {effort:.1f}/5 effort and {conf:.1f}/5 confidence. Focus on one area to improve next month!"


def _recovery_insight(sore_days: int, great_days: int, entry_count: int) -> str:
    if sore_days == 0:
        if great_days > entry_count * MOSTLY_GREAT_SHARE:
            tail = "You felt great most days!"
        else:
            tail = "Keep listening to your body."
        return f"✨ Zero sore or hurt days this month — your body is recovering well. {tail}"
    if sore_days <= NORMAL_SORE_DAYS:
        plural = "s" if sore_days > 1 else ""
        return f"🩹 You had {sore_days} sore day{plural} this month — totally normal for a hard-working athlete. Make sure to keep up recovery habits!"
    return f"⚠️ {sore_days} days of soreness or discomfort this month. It might be worth talking to your coach about recovery — rest is part of training too!"


def generate_monthly_insights(metrics: AggregateMetrics) -> List[str]:
    """Up to three messages: volume, effort/confidence, recovery."""
    if not metrics.entry_count:
        return [EMPTY_MONTH]

    insights = [
        _volume_insight(metrics.total_minutes),
        _effort_confidence_insight(metrics.avg_effort, metrics.avg_confidence),
        _recovery_insight(metrics.sore_days, metrics.great_days, metrics.entry_count),
    ]
    return insights[:MAX_MONTHLY_INSIGHTS]


def generate_yearly_insights(metrics: AggregateMetrics) -> List[str]:
    """Hours message, plus a multi-sport message when 3+ sports were logged."""
    if not metrics.entry_count:
        return [EMPTY_YEAR]

    hours = metrics.hours
    if hours >= ELITE_YEAR_HOURS:
        insights = [f"🏅 You trained for over {hours} hours this year — that's elite-level dedication!"]
    else:
        insights = [f"📆 You put in {hours} hours of training this year. Every hour makes you better!"]

    if metrics.sports_count >= MULTI_SPORT_COUNT:
        insights.append(
            f"🎽 You played {metrics.sports_count} different sports this year. Multi-sport athletes develop better all-around athleticism!"
        )

    return insights[:MAX_YEARLY_INSIGHTS]
