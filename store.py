# store.py
# Хранилище записей поверх Flask-SQLAlchemy: пользователи, проекты, оценки

import logging
from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from errors import NotFound, ValidationError, StoreUnavailable
from extensions import db
from models import User, Project, Evaluation, JudgeAssignment

logger = logging.getLogger(__name__)

COLLECTIONS = {
    'users': User,
    'projects': Project,
    'evaluations': Evaluation,
}

# Поля-множества: (коллекция, поле) -> (колонка владельца, колонка элемента) в JudgeAssignment
SET_FIELDS = {
    ('projects', 'assigned_judges'): ('project_id', 'judge_id'),
    ('users', 'assigned_projects'): ('judge_id', 'project_id'),
}

DEFAULT_BATCH_SIZE = 10

_TX_DEPTH_KEY = 'store_tx_depth'


def chunked(items, size):
    """Делит список на пачки не длиннее size."""
    items = list(items)
    for i in range(0, len(items), size):
        yield items[i:i + size]


class EvaluationStore:
    """Хранилище с операциями над коллекциями users / projects / evaluations.

    Каждая запись коммитится сразу, кроме записей внутри ``transaction()``:
    там всё сохраняется одним коммитом или откатывается целиком.
    """

    def __init__(self, database, batch_size=None):
        self._db = database
        self._batch_size = batch_size

    @property
    def session(self):
        return self._db.session

    @property
    def batch_size(self):
        if self._batch_size:
            return self._batch_size
        return current_app.config.get('STORE_BATCH_SIZE', DEFAULT_BATCH_SIZE)

    # --- Транзакции и ошибки ---

    @property
    def _depth(self):
        return self.session.info.get(_TX_DEPTH_KEY, 0)

    @_depth.setter
    def _depth(self, value):
        self.session.info[_TX_DEPTH_KEY] = value

    @contextmanager
    def transaction(self):
        """Группирует записи в один коммит."""
        self._depth += 1
        try:
            with self._guard():
                yield self
                if self._depth == 1:
                    self.session.commit()
        except Exception:
            if self._depth == 1:
                self.session.rollback()
            raise
        finally:
            self._depth -= 1

    @contextmanager
    def _guard(self):
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            logger.warning('Нарушение целостности данных: %s', e.orig)
            raise ValidationError(f'Нарушение целостности данных: {e.orig}') from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error('Хранилище недоступно: %s', e)
            raise StoreUnavailable(f'Хранилище недоступно: {e}') from e

    def _commit(self):
        with self._guard():
            if self._depth:
                self.session.flush()
            else:
                self.session.commit()

    def _model(self, collection):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValidationError(f'Неизвестная коллекция "{collection}".')

    @staticmethod
    def _check_fields(model, fields):
        columns = set(model.__table__.columns.keys()) - {'id'}
        unknown = set(fields) - columns
        if unknown:
            raise ValidationError(f'Неизвестные поля: {", ".join(sorted(unknown))}.')

    # --- Чтение ---

    def list_all(self, collection):
        model = self._model(collection)
        with self._guard():
            return model.query.order_by(model.id).all()

    def get_by_id(self, collection, record_id):
        model = self._model(collection)
        with self._guard():
            record = self.session.get(model, record_id)
        if record is None:
            raise NotFound(collection, record_id)
        return record

    def query_by_field(self, collection, field, value):
        model = self._model(collection)
        self._check_fields(model, [field])
        with self._guard():
            return model.query.filter(getattr(model, field) == value).order_by(model.id).all()

    def query_by_id_membership(self, collection, ids):
        """Записи с id из списка. Запрос IN (...) делится на пачки по batch_size."""
        model = self._model(collection)
        records = []
        with self._guard():
            for batch in chunked(ids, self.batch_size):
                records.extend(model.query.filter(model.id.in_(batch)).order_by(model.id).all())
        return records

    # --- Запись ---

    def create_record(self, collection, fields):
        model = self._model(collection)
        self._check_fields(model, fields)
        record = model(**fields)
        self.session.add(record)
        self._commit()
        logger.info('%s: создана запись %s', collection, record.id)
        return record.id

    def update_record(self, collection, record_id, fields):
        model = self._model(collection)
        self._check_fields(model, fields)
        record = self.get_by_id(collection, record_id)
        for key, value in fields.items():
            setattr(record, key, value)
        self._commit()
        logger.info('%s: обновлена запись %s', collection, record_id)

    def delete_record(self, collection, record_id):
        record = self.get_by_id(collection, record_id)
        self.session.delete(record)
        self._commit()
        logger.info('%s: удалена запись %s', collection, record_id)

    def _set_field(self, collection, field):
        try:
            return SET_FIELDS[(collection, field)]
        except KeyError:
            raise ValidationError(f'Поле {collection}.{field} не является множеством.')

    def _find_link(self, owner_col, owner_id, member_col, value):
        with self._guard():
            return JudgeAssignment.query.filter_by(**{owner_col: owner_id, member_col: value}).first()

    def add_to_set_field(self, collection, record_id, field, value):
        """Добавляет value в поле-множество. Повторный вызов ничего не меняет."""
        owner_col, member_col = self._set_field(collection, field)
        self.get_by_id(collection, record_id)
        if self._find_link(owner_col, record_id, member_col, value):
            return False
        self.session.add(JudgeAssignment(**{owner_col: record_id, member_col: value}))
        self._commit()
        return True

    def remove_from_set_field(self, collection, record_id, field, value):
        owner_col, member_col = self._set_field(collection, field)
        link = self._find_link(owner_col, record_id, member_col, value)
        if link is None:
            return False
        self.session.delete(link)
        self._commit()
        return True


evaluation_store = EvaluationStore(db)
