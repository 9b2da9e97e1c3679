# config.py
# Конфигурация приложения Flask

import os


class Config:
    # Абсолютный путь к базе данных по умолчанию
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f'sqlite:///{os.path.join(BASE_DIR, "instance", "expoferia.db")}'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-change-me')  # Замени в продакшене

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Сколько id можно передать в один запрос IN (...) к хранилищу
    STORE_BATCH_SIZE = int(os.environ.get('STORE_BATCH_SIZE', 10))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SECRET_KEY = 'test-secret'
    LOG_LEVEL = 'WARNING'
