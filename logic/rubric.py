# logic/rubric.py
# Рубрика жюри и сохранение оценок

import logging
import math
from collections import OrderedDict
from datetime import datetime, timezone

from errors import ValidationError

logger = logging.getLogger(__name__)

CRITERIA = OrderedDict([
    ('punctuality', {'name': 'Puntualidad y Presentación', 'max': 10}),
    ('exposition', {'name': 'Exposición del Tema', 'max': 30}),
    ('materials', {'name': 'Materiales/Recursos Didácticos', 'max': 30}),
    ('triptych', {'name': 'Tríptico', 'max': 20}),
    ('cleanliness', {'name': 'Limpieza', 'max': 10}),
])

MAX_JURY_SCORE = 100
MAX_INTERNAL_GRADE = 100


def _to_number(value, what):
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f'{what}: ожидается число.')
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            raise ValidationError(f'{what}: "{value}" не является числом.')
    # NaN и бесконечность приходят из JSON-литералов и строк вроде "inf"
    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError(f'{what}: "{value}" не является конечным числом.')
    return number


def clamp_score(criterion, value):
    """Приводит балл по критерию к целому в диапазоне [0, max]. Пусто -> 0."""
    if criterion not in CRITERIA:
        raise ValidationError(f'Неизвестный критерий "{criterion}".')
    number = _to_number(value, CRITERIA[criterion]['name'])
    if number is None:
        return 0
    return min(max(0, int(number)), CRITERIA[criterion]['max'])


def clamp_scores(raw_scores):
    if raw_scores is None:
        raw_scores = {}
    if not isinstance(raw_scores, dict):
        raise ValidationError('Баллы должны передаваться объектом {критерий: балл}.')
    unknown = set(raw_scores) - set(CRITERIA)
    if unknown:
        raise ValidationError(f'Неизвестные критерии: {", ".join(sorted(str(k) for k in unknown))}.')
    return {key: clamp_score(key, raw_scores.get(key)) for key in CRITERIA}


def total_score(scores):
    return sum(scores.get(key) or 0 for key in CRITERIA)


def parse_internal_grade(value):
    """Оценка учителя: пусто -> None, иначе число в [0, 100]."""
    number = _to_number(value, 'Оценка учителя')
    if number is None:
        return None
    if not 0 <= number <= MAX_INTERNAL_GRADE:
        raise ValidationError(f'Оценка учителя должна быть от 0 до {MAX_INTERNAL_GRADE}.')
    return float(number)


def submit_evaluation(store, judge, project, raw_scores):
    """
    Сохраняет оценку судьи для проекта: создает новую или обновляет
    существующую (одна оценка на пару судья/проект).
    Возвращает (evaluation, created).
    """
    if judge.role != 'judge':
        raise ValidationError('Оценивать проекты может только судья.')
    if project.id not in judge.assigned_project_ids:
        raise ValidationError('Вы не назначены судьей на этот проект.')

    scores = clamp_scores(raw_scores)
    fields = dict(scores, total_score=total_score(scores))

    existing = store.query_by_field('evaluations', 'judge_id', judge.id)
    existing = next((e for e in existing if e.project_id == project.id), None)

    if existing:
        store.update_record('evaluations', existing.id, dict(fields, scored_at=datetime.now(timezone.utc)))
        evaluation, created = existing, False
    else:
        evaluation_id = store.create_record(
            'evaluations', dict(fields, judge_id=judge.id, project_id=project.id)
        )
        evaluation, created = store.get_by_id('evaluations', evaluation_id), True

    logger.info('Оценка судьи %s для проекта %s %s: %s/%s',
                judge.id, project.id, 'создана' if created else 'обновлена',
                evaluation.total_score, MAX_JURY_SCORE)
    return evaluation, created
