# routes/main.py
# Рабочее место судьи: назначенные проекты и выставление оценок

from flask import Blueprint, jsonify, session

from logic import CRITERIA, judge_progress, submit_evaluation
from logic.rubric import MAX_JURY_SCORE
from routes import get_payload, role_required
from store import evaluation_store as store

main_bp = Blueprint('main', __name__, url_prefix='/judge')


@main_bp.route('/projects')
@role_required('judge')
def judge_projects():
    judge = store.get_by_id('users', session['user_id'])

    # Проекты судьи грузим пачками по id, оценки - только его собственные
    projects = store.query_by_id_membership('projects', judge.assigned_project_ids)
    evaluations = store.query_by_field('evaluations', 'judge_id', judge.id)
    progress = judge_progress(judge, projects, evaluations)

    return jsonify(
        status='success',
        judge=judge.to_dict(),
        criteria=CRITERIA,
        max_score=MAX_JURY_SCORE,
        projects=progress,
        completed=sum(1 for p in progress if p['status'] == 'complete'),
    )


@main_bp.route('/projects/<int:project_id>/evaluation', methods=['POST'])
@role_required('judge')
def submit_project_evaluation(project_id):
    judge = store.get_by_id('users', session['user_id'])
    project = store.get_by_id('projects', project_id)

    data = get_payload()
    evaluation, created = submit_evaluation(store, judge, project, data.get('scores', data))

    return jsonify(status='success', created=created, evaluation=evaluation.to_dict()), 201 if created else 200
