"""Dashboard aggregates over employee and leave lists."""

from __future__ import annotations

from typing import Any, Iterable


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def summarize_workforce(
    employees: list[dict[str, Any]],
    leaves: list[dict[str, Any]],
) -> dict[str, Any]:
    """Employee count, pending leave count and total monthly salary."""
    pending = sum(1 for lv in leaves if str(lv.get("status") or "").lower() == "pending")
    return {
        "employee_count": len(employees),
        "pending_leaves": pending,
        "total_salary": sum(_number(e.get("salary")) for e in employees),
    }


def insight_prompt(summary: dict[str, Any]) -> str:
    return (
        f"Summarize HR status for {summary['employee_count']} employees and "
        f"{summary['pending_leaves']} pending leaves in one sentence."
    )


def filter_records(
    records: list[dict[str, Any]],
    term: str,
    fields: Iterable[str],
) -> list[dict[str, Any]]:
    """Case-insensitive substring search over the given fields. Blank term keeps all."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(records)
    keys = list(fields)
    return [
        r for r in records
        if any(needle in str(r.get(k) if r.get(k) is not None else "").lower() for k in keys)
    ]
