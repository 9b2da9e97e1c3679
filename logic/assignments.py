# logic/assignments.py
# Назначение судей на проекты

import logging
from dataclasses import dataclass, field
from typing import List

from errors import ExpoferiaError, PartialSyncFailure, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    added: List[int] = field(default_factory=list)
    removed: List[int] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self):
        return {'added': self.added, 'removed': self.removed, 'errors': self.errors}


def _normalize_ids(judge_ids):
    ids = []
    for raw in judge_ids or []:
        try:
            judge_id = int(raw)
        except (TypeError, ValueError):
            raise ValidationError(f'Некорректный id судьи: "{raw}".')
        if judge_id not in ids:
            ids.append(judge_id)
    return ids


def sync_judge_assignment(store, project, new_judge_ids):
    """
    Приводит список судей проекта к new_judge_ids.

    Обе стороны связи (судьи проекта и проекты судьи) - это одна таблица
    judge_assignments, все изменения пишутся одной транзакцией. Повторный
    вызов с теми же данными ничего не меняет, поэтому после сбоя операцию
    можно просто повторить.
    """
    requested = _normalize_ids(new_judge_ids)
    current = list(project.assigned_judge_ids)
    result = SyncResult()

    # Проверяем судей до любой записи: неизвестные id не назначаем, а сообщаем о них
    judges = {u.id: u for u in store.query_by_id_membership('users', requested)}
    wanted = []
    for judge_id in requested:
        judge = judges.get(judge_id)
        if judge is None:
            result.errors.append(f'Пользователь {judge_id} не найден.')
        elif judge.role != 'judge':
            result.errors.append(f'Пользователь {judge.username} не является судьей.')
        else:
            wanted.append(judge_id)

    to_add = [j for j in wanted if j not in current]
    to_remove = [j for j in current if j not in wanted]

    try:
        with store.transaction():
            for judge_id in to_add:
                store.add_to_set_field('projects', project.id, 'assigned_judges', judge_id)
            for judge_id in to_remove:
                store.remove_from_set_field('projects', project.id, 'assigned_judges', judge_id)
    except ExpoferiaError as e:
        logger.error('Синхронизация судей проекта %s не удалась: %s', project.id, e)
        raise PartialSyncFailure(project.id, to_add, to_remove) from e

    result.added, result.removed = to_add, to_remove
    logger.info('Проект %s: судьи добавлены %s, сняты %s', project.id, to_add, to_remove)
    return result


def judge_progress(judge, projects, evaluations):
    """
    Проекты судьи со статусом: 'complete', если оценка уже выставлена,
    иначе 'pending'.
    """
    by_project = {e.project_id: e for e in evaluations if e.judge_id == judge.id}
    assigned = set(judge.assigned_project_ids)
    progress = []
    for project in projects:
        if project.id not in assigned:
            continue
        evaluation = by_project.get(project.id)
        progress.append({
            'project': project.to_dict(),
            'status': 'complete' if evaluation else 'pending',
            'evaluation': evaluation.to_dict() if evaluation else None,
        })
    return progress
