"""Sorting and summary aggregation shared by the console and HTML reports.

Functions:
    sort_results(results)            -> SuiteResults  (in place)
    summarize_collection(entities)   -> dict
    build_improvement_list(results)  -> dict
    build_summary(results)           -> dict

Averages are rounded to two decimals with ``round()``; the total score and
the improvement list are summed from the raw values.
"""

from typing import Iterable

from cuke_report.models import COLLECTIONS, SuiteResults

_SORTED_LISTS = COLLECTIONS + ("rules",)


# ---------------------------------------------------------------------------
# Sort engine
# ---------------------------------------------------------------------------

def sort_results(results: SuiteResults) -> SuiteResults:
    """Reorder every collection and the rule list by descending score.

    The sort is stable: items with equal scores keep their input order.
    """
    for name in _SORTED_LISTS:
        getattr(results, name).sort(key=lambda item: item.score, reverse=True)
    return results


# ---------------------------------------------------------------------------
# Summary aggregator
# ---------------------------------------------------------------------------

def summarize_collection(entities: Iterable) -> dict:
    scores = [entity.score for entity in entities]
    if not scores:
        return {"total": 0, "min": 0, "max": 0, "average": 0.0}

    return {
        "total":   len(scores),
        "min":     min(scores),
        "max":     max(scores),
        "average": round(sum(scores) / len(scores), 2),
    }


def build_improvement_list(results: SuiteResults) -> dict[str, int]:
    """Return rule -> total occurrences, most frequent first.

    Ties keep the order in which rules were first seen.
    """
    totals: dict[str, int] = {}
    for entity in results.all_entities():
        for rule, count in entity.rules_hash.items():
            totals[rule] = totals.get(rule, 0) + count

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return dict(ranked)


def build_summary(results: SuiteResults) -> dict:
    summary: dict = {
        "total_score": sum(entity.score for entity in results.all_entities()),
    }
    for name in COLLECTIONS:
        summary[name] = summarize_collection(getattr(results, name))
    summary["improvement_list"] = build_improvement_list(results)
    return summary
