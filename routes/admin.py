# routes/admin.py

import logging

from flask import Blueprint, jsonify, request, session
from werkzeug.security import generate_password_hash

from errors import ValidationError
from logic import parse_internal_grade, sync_judge_assignment
from models import ROLES
from routes import admin_required, get_payload
from store import evaluation_store as store

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


def _required(data, *names):
    missing = [n for n in names if not str(data.get(n) or '').strip()]
    if missing:
        raise ValidationError(f'Обязательные поля: {", ".join(missing)}.')


def _role(value):
    if value not in ROLES:
        raise ValidationError(f'Роль должна быть одной из: {", ".join(ROLES)}.')
    return value


# --- БЛОК CRUD для User ---
@admin_bp.route('/users', methods=['GET', 'POST'])
@admin_required
def manage_users():
    if request.method == 'POST':
        data = get_payload()
        _required(data, 'username', 'password', 'role')
        username = data['username'].strip()
        if store.query_by_field('users', 'username', username):
            raise ValidationError(f'Пользователь {username} уже существует.')

        user_id = store.create_record('users', {
            'username': username,
            'password_hash': generate_password_hash(data['password']),
            'role': _role(data['role']),
            'name': (data.get('name') or '').strip() or username,
        })
        user = store.get_by_id('users', user_id)
        return jsonify(status='success', user=user.to_dict()), 201

    users = store.list_all('users')
    return jsonify(status='success', users=[u.to_dict() for u in users])


@admin_bp.route('/user/<int:user_id>/edit', methods=['POST'])
@admin_required
def edit_user(user_id):
    user = store.get_by_id('users', user_id)
    data = get_payload()

    fields = {}
    if data.get('name'):
        fields['name'] = data['name'].strip()
    if data.get('password'):
        fields['password_hash'] = generate_password_hash(data['password'])
    if data.get('role') and data['role'] != user.role:
        if user.role == 'judge' and user.assigned_project_ids:
            raise ValidationError('Сначала снимите судью со всех проектов.')
        fields['role'] = _role(data['role'])

    store.update_record('users', user_id, fields)
    return jsonify(status='success', user=user.to_dict())


@admin_bp.route('/user/<int:user_id>/delete', methods=['POST'])
@admin_required
def delete_user(user_id):
    if user_id == session.get('user_id'):
        raise ValidationError('Вы не можете удалить свою собственную учетную запись.')

    # Назначения удаляются каскадом, оценки судьи остаются без автора
    store.delete_record('users', user_id)
    return jsonify(status='success')


# --- БЛОК CRUD для Project ---
def _project_fields(data):
    fields = {}
    for name in ('name', 'description', 'course'):
        if name in data:
            fields[name] = (data.get(name) or '').strip()
    if 'advisors' in data:
        fields['advisors'] = (data.get('advisors') or '').strip() or 'N/A'
    if 'internal_grade' in data:
        fields['internal_grade'] = parse_internal_grade(data.get('internal_grade'))
    return fields


@admin_bp.route('/projects', methods=['GET', 'POST'])
@admin_required
def manage_projects():
    if request.method == 'POST':
        data = get_payload()
        _required(data, 'name', 'course')
        fields = _project_fields(data)
        fields.setdefault('advisors', 'N/A')
        project_id = store.create_record('projects', fields)
        project = store.get_by_id('projects', project_id)
        return jsonify(status='success', project=project.to_dict()), 201

    projects = store.list_all('projects')
    return jsonify(status='success', projects=[p.to_dict() for p in projects])


@admin_bp.route('/project/<int:project_id>/edit', methods=['POST'])
@admin_required
def edit_project(project_id):
    project = store.get_by_id('projects', project_id)
    fields = _project_fields(get_payload())
    if 'name' in fields and not fields['name']:
        raise ValidationError('Название проекта не может быть пустым.')

    store.update_record('projects', project_id, fields)
    return jsonify(status='success', project=project.to_dict())


@admin_bp.route('/project/<int:project_id>/delete', methods=['POST'])
@admin_required
def delete_project(project_id):
    # Назначения и оценки проекта удаляются каскадом
    store.delete_record('projects', project_id)
    return jsonify(status='success')


@admin_bp.route('/project/<int:project_id>/judges', methods=['POST'])
@admin_required
def assign_judges(project_id):
    project = store.get_by_id('projects', project_id)
    data = request.get_json(silent=True)
    if data is None:
        judge_ids = request.form.getlist('judge_ids')
    else:
        judge_ids = data.get('judge_ids', [])
    if not isinstance(judge_ids, list):
        raise ValidationError('judge_ids должен быть списком.')

    result = sync_judge_assignment(store, project, judge_ids)
    return jsonify(status='success', project=project.to_dict(), **result.to_dict())
