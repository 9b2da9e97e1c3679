# errors.py
# Иерархия ошибок приложения. Маршруты превращают их в JSON-ответы (см. app.py)


class ExpoferiaError(Exception):
    """Базовая ошибка приложения."""
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class NotFound(ExpoferiaError):
    """Запись не найдена."""
    status_code = 404

    def __init__(self, collection, record_id):
        super().__init__(f'{collection}: запись {record_id} не найдена.')
        self.collection = collection
        self.record_id = record_id


class ValidationError(ExpoferiaError):
    """Некорректные входные данные."""
    status_code = 400


class PartialSyncFailure(ExpoferiaError):
    """Синхронизация назначений жюри прервана."""
    status_code = 409

    def __init__(self, project_id, added=(), removed=(), message=None):
        super().__init__(message or (
            f'Назначения для проекта {project_id} не сохранены. '
            'Изменения отменены, операцию можно повторить.'
        ))
        self.project_id = project_id
        self.added = list(added)
        self.removed = list(removed)


class StoreUnavailable(ExpoferiaError):
    """Хранилище недоступно."""
    status_code = 503
