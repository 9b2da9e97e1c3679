# routes/__init__.py
# Blueprints приложения и общие декораторы доступа

from functools import wraps

from flask import jsonify, request, session

from errors import ValidationError


def get_payload():
    """Данные запроса: JSON-объект или обычная форма."""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError('Тело запроса должно быть JSON-объектом.')
    return data


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'user_id' not in session:
            return jsonify(status='error', message='Для доступа необходимо войти в систему.'), 401
        return f(*args, **kwargs)
    return decorated_function


def role_required(*roles):
    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            if session.get('user_role') not in roles:
                return jsonify(status='error', message='У вас нет прав для доступа к этой странице.'), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator


admin_required = role_required('admin')
