# logic/grouping.py
# Группировка проектов по курсам и ранжирование внутри групп

import enum
from dataclasses import dataclass, field
from itertools import groupby
from typing import List

# Канонический порядок курсов: группы всегда выводятся в этом порядке, а не по алфавиту
COURSE_ORDER = ('PRIMEROS', 'SEGUNDOS', 'TERCEROS', 'CUARTOS', 'QUINTOS', 'SEXTOS')

# Префикс -> каноническая группа. Срабатывает первый подходящий префикс
COURSE_PREFIXES = (
    ('PRIMER', 'PRIMEROS'),
    ('SEGUND', 'SEGUNDOS'),
    ('TERCER', 'TERCEROS'),
    ('CUART', 'CUARTOS'),
    ('QUINT', 'QUINTOS'),
    ('SEXT', 'SEXTOS'),
)

OTHER_GROUP = 'OTHER'


class GroupingStrategy(enum.Enum):
    EXACT = 'exact'
    PREFIX = 'prefix'


class RankKey(enum.Enum):
    JURY_AVERAGE = 'jury_average'
    FINAL_GRADE = 'final_grade'


@dataclass
class CourseGroup:
    label: str
    results: List = field(default_factory=list)

    def to_dict(self):
        return {
            'course': self.label,
            'results': [r.to_dict() for r in self.results],
        }


def normalize_course(course):
    return (course or '').strip().upper()


def exact_group_key(course):
    return normalize_course(course) or OTHER_GROUP


def prefix_group_key(course):
    normalized = normalize_course(course)
    for prefix, label in COURSE_PREFIXES:
        if normalized.startswith(prefix):
            return label
    return OTHER_GROUP


_GROUP_KEYS = {
    GroupingStrategy.EXACT: exact_group_key,
    GroupingStrategy.PREFIX: prefix_group_key,
}


def score_for(result, rank_by):
    if RankKey(rank_by) is RankKey.FINAL_GRADE:
        # Итог "в ожидании" ранжируется как 0
        return result.grade.final_grade or 0
    return result.jury.average


def rank(results, rank_by=RankKey.JURY_AVERAGE):
    """По убыванию балла. Сортировка устойчивая: при равенстве сохраняется входной порядок."""
    return sorted(results, key=lambda r: score_for(r, rank_by), reverse=True)


def group_and_rank(projects, results, strategy=GroupingStrategy.EXACT, rank_by=RankKey.JURY_AVERAGE):
    """
    Раскладывает результаты по группам курсов.

    projects - проекты в порядке хранилища, results - {project_id: ConsolidatedResult}.
    Сначала идут канонические группы из COURSE_ORDER, затем все остальные
    в порядке первого появления.
    """
    group_key = _GROUP_KEYS[GroupingStrategy(strategy)]

    grouped = {}
    for project in projects:
        result = results.get(project.id)
        if result is None:
            continue
        grouped.setdefault(group_key(project.course), []).append(result)

    ordered = [CourseGroup(label, rank(grouped.pop(label), rank_by))
               for label in COURSE_ORDER if label in grouped]
    # dict хранит порядок вставки = порядок первого появления
    ordered.extend(CourseGroup(label, rank(items, rank_by)) for label, items in grouped.items())
    return ordered


def subgroup_by_course(group):
    """Делит группу по исходной строке курса ("PRIMERO A", "PRIMERO B"), по алфавиту."""
    def raw_course(result):
        return result.project.course or ''

    ordered = sorted(group.results, key=raw_course)
    return [CourseGroup(course, list(items)) for course, items in groupby(ordered, key=raw_course)]
