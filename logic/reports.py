# logic/reports.py
# Отчеты по результатам ярмарки. Каждый отчет - набор параметров,
# а не отдельная копия логики подсчета

from dataclasses import dataclass
from typing import Optional

from errors import NotFound
from .aggregation import JuryAggregate, aggregate_all
from .grouping import GroupingStrategy, RankKey, group_and_rank, rank, subgroup_by_course
from .scaling import ScalingPolicy, ScaledGrade, scale


@dataclass
class ConsolidatedResult:
    project: object
    jury: JuryAggregate
    grade: ScaledGrade

    @property
    def internal_grade(self):
        return self.project.internal_grade or 0

    def to_dict(self):
        return {
            'project_id': self.project.id,
            'name': self.project.name,
            'course': self.project.course,
            'advisors': self.project.advisors,
            'students': self.project.students,
            'internal_grade': self.internal_grade,
            'jury_average': self.jury.average,
            'evaluations': self.jury.count,
            **self.grade.to_dict(),
        }


@dataclass(frozen=True)
class ReportDefinition:
    policy: ScalingPolicy
    grouping: Optional[GroupingStrategy] = None    # None - общий рейтинг без групп
    rank_by: RankKey = RankKey.JURY_AVERAGE
    evaluated_only: bool = False
    subgroup: bool = False


REPORTS = {
    # Сводный отчет администратора: шкала 0..100, общий рейтинг по среднему жюри
    'admin': ReportDefinition(policy=ScalingPolicy.RAW_100),
    # Отчет для учителей: (оценка учителя + среднее жюри) / 200 * 5.0
    'professor': ReportDefinition(
        policy=ScalingPolicy.SUM_TO_5,
        grouping=GroupingStrategy.EXACT,
        rank_by=RankKey.FINAL_GRADE,
    ),
    # Отчет для учеников: только оцененные проекты, по параллелям и классам
    'students': ReportDefinition(
        policy=ScalingPolicy.INDEPENDENT_TO_5,
        grouping=GroupingStrategy.PREFIX,
        evaluated_only=True,
        subgroup=True,
    ),
}


def consolidate(projects, evaluations, policy):
    """{project_id: ConsolidatedResult} для всех проектов."""
    aggregates = aggregate_all(projects, evaluations)
    return {
        p.id: ConsolidatedResult(project=p, jury=aggregates[p.id],
                                 grade=scale(policy, p.internal_grade, aggregates[p.id]))
        for p in projects
    }


def get_report_definition(name):
    try:
        return REPORTS[name]
    except KeyError:
        raise NotFound('reports', name)


def build_report(name, projects, evaluations):
    definition = get_report_definition(name)
    results = consolidate(projects, evaluations, definition.policy)
    if definition.evaluated_only:
        results = {pid: r for pid, r in results.items() if r.jury.is_evaluated}

    report = {'report': name, 'policy': definition.policy.value}

    if definition.grouping is None:
        ordered = [results[p.id] for p in projects if p.id in results]
        report['results'] = [r.to_dict() for r in rank(ordered, definition.rank_by)]
        return report

    groups = group_and_rank(projects, results, definition.grouping, definition.rank_by)
    report['groups'] = []
    for group in groups:
        data = group.to_dict()
        if definition.subgroup:
            data['courses'] = [sub.to_dict() for sub in subgroup_by_course(group)]
        report['groups'].append(data)
    return report


def load_report(name, store):
    get_report_definition(name)
    projects = store.list_all('projects')
    evaluations = store.list_all('evaluations')
    return build_report(name, projects, evaluations)
