"""Агрегация метрик вовлечённости по окну последних логов.

Все метрики считаются только по переданному окну (не более REPORT_LIMIT
записей, уже отсортированных от новых к старым), а не по всей выборке.
"""

from collections import Counter

from app.config import ISSUE_ACTIONS, MAX_ISSUES, TOP_ACTIONS
from app.models.log import LogReport


def count_by(logs: list[dict], field: str) -> Counter:
    """Количество записей на значение поля; порядок ключей = порядок первого появления"""
    counts = Counter()
    for log in logs:
        counts[log[field]] += 1
    return counts


def top_actions(action_counts: Counter, n: int = TOP_ACTIONS) -> list[str]:
    # most_common сортирует стабильно: при равенстве раньше встреченное действие идёт первым
    return [f"{action} ({count})" for action, count in action_counts.most_common(n)]


def find_issues(logs: list[dict], limit: int = MAX_ISSUES) -> list[dict]:
    return [log for log in logs if log["action"] in ISSUE_ACTIONS][:limit]


def build_report(logs: list[dict]) -> LogReport:
    user_counts = count_by(logs, "uid")
    total_users = len(user_counts)
    one_time_users = sum(1 for c in user_counts.values() if c == 1)
    repeat_users = sum(1 for c in user_counts.values() if c > 1)

    # базы за прошлый период нет, поэтому все уникальные пользователи окна считаются новыми
    new_users = total_users

    return LogReport(
        total_users=total_users,
        new_users=new_users,
        repeat_users=repeat_users,
        one_time_users=one_time_users,
        top_actions=top_actions(count_by(logs, "action")),
        logs=logs,
        issues=find_issues(logs),
    )
