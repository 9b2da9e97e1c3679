# routes/reports.py
# Отчеты с результатами. Пересчитываются при каждом запросе

from flask import Blueprint, jsonify, session

from logic import load_report
from store import evaluation_store as store

reports_bp = Blueprint('reports', __name__, url_prefix='/reports')

# Отчеты, доступные только определенным ролям; остальные открыты всем
RESTRICTED_REPORTS = {
    'admin': ('admin',),
    'professor': ('admin', 'teacher'),
}


@reports_bp.route('/<name>')
def report_view(name):
    roles = RESTRICTED_REPORTS.get(name)
    if roles and session.get('user_role') not in roles:
        return jsonify(status='error', message='У вас нет прав для просмотра этого отчета.'), 403

    report = load_report(name, store)
    return jsonify(status='success', **report)
