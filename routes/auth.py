# routes/auth.py
# Маршруты для авторизации

import logging

from flask import Blueprint, jsonify, session

from routes import get_payload, login_required
from store import evaluation_store as store

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    data = get_payload()
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''
    if not username or not password:
        return jsonify(status='error', message='Введите имя пользователя и пароль.'), 400

    users = store.query_by_field('users', 'username', username)
    user = users[0] if users else None

    # Одинаковый ответ для неизвестного пользователя и неверного пароля
    if user is None or not user.check_password(password):
        logger.info('Неудачная попытка входа: %s', username)
        return jsonify(status='error', message='Неверное имя пользователя или пароль.'), 401

    session.clear()  # Очищаем старую сессию
    session['user_id'] = user.id
    session['user_role'] = user.role
    logger.info('Вход пользователя %s (%s)', user.username, user.role)
    return jsonify(status='success', user=user.to_dict())


@auth_bp.route('/logout')
def logout():
    session.clear()
    return jsonify(status='success')


@auth_bp.route('/me')
@login_required
def me():
    user = store.get_by_id('users', session['user_id'])
    return jsonify(status='success', user=user.to_dict())
