# app.py
# Основной файл Flask-приложения с использованием паттерна Application Factory

import logging
import os

from flask import Flask, jsonify
from config import Config
from errors import ExpoferiaError
from extensions import db, migrate

# Важно импортировать модели здесь, чтобы Alembic (Migrate) мог их видеть
from models import User, Project, JudgeAssignment, Evaluation  # noqa: F401

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

_log_handler = logging.StreamHandler()
_log_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)

    # Логгеры модулей (store, logic, routes) пишут в общий обработчик
    root_logger = logging.getLogger()
    if _log_handler not in root_logger.handlers:
        root_logger.addHandler(_log_handler)
    root_logger.setLevel(level)
    app.logger.setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(ExpoferiaError)
    def handle_app_error(error):
        if error.status_code >= 500:
            app.logger.error('%s: %s', error.__class__.__name__, error.message)
        return jsonify(status='error', error=error.__class__.__name__, message=error.message), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify(status='error', message='Страница не найдена.'), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify(status='error', message='Метод не поддерживается.'), 405


def create_app(config_class=Config):
    # Создаем экземпляр приложения
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)
    os.makedirs(app.instance_path, exist_ok=True)

    # --- Инициализируем расширения С ПРИЛОЖЕНИЕМ ---
    db.init_app(app)
    migrate.init_app(app, db)

    # --- Регистрируем наши Blueprints (маршруты) ---
    from routes.auth import auth_bp
    from routes.main import main_bp
    from routes.admin import admin_bp
    from routes.reports import reports_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(main_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(reports_bp)

    register_error_handlers(app)

    @app.route('/health')
    def health():
        return jsonify(status='success')

    return app
