# logic/aggregation.py
# Сведение оценок жюри по проектам

from collections import defaultdict
from dataclasses import dataclass


@dataclass(frozen=True)
class JuryAggregate:
    count: int = 0
    average: float = 0.0

    @property
    def is_evaluated(self):
        return self.count > 0


def aggregate(project_id, evaluations):
    """Количество оценок и средний балл жюри (0, если оценок нет)."""
    totals = [e.total_score or 0 for e in evaluations if e.project_id == project_id]
    if not totals:
        return JuryAggregate()
    return JuryAggregate(count=len(totals), average=sum(totals) / len(totals))


def aggregate_all(projects, evaluations):
    """То же, что aggregate, но для всех проектов за один проход: {project_id: JuryAggregate}."""
    totals = defaultdict(list)
    for e in evaluations:
        totals[e.project_id].append(e.total_score or 0)

    result = {}
    for project in projects:
        scores = totals.get(project.id)
        result[project.id] = (
            JuryAggregate(count=len(scores), average=sum(scores) / len(scores))
            if scores else JuryAggregate()
        )
    return result
