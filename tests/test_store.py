import pytest
from sqlalchemy.exc import OperationalError

from errors import NotFound, StoreUnavailable, ValidationError
from models import Evaluation, JudgeAssignment
from store import chunked


def test_chunked_splits_into_bounded_batches():
    assert list(chunked(range(7), 3)) == [[0, 1, 2], [3, 4, 5], [6]]
    assert list(chunked([], 10)) == []


class TestCrud:
    def test_create_get_update_delete(self, store):
        project_id = store.create_record('projects', {'name': 'Robot', 'course': 'TERCERO A'})

        project = store.get_by_id('projects', project_id)
        assert project.name == 'Robot'
        assert project.advisors == 'N/A'

        store.update_record('projects', project_id, {'internal_grade': 75.0})
        assert store.get_by_id('projects', project_id).internal_grade == 75.0

        store.delete_record('projects', project_id)
        with pytest.raises(NotFound):
            store.get_by_id('projects', project_id)

    def test_unknown_collection_and_field(self, store, create_project):
        project = create_project()
        with pytest.raises(ValidationError):
            store.list_all('schools')
        with pytest.raises(ValidationError):
            store.update_record('projects', project.id, {'color': 'red'})

    def test_query_by_field(self, store, create_user):
        create_user(username='ana', role='teacher')
        create_user(username='beto')
        assert [u.username for u in store.query_by_field('users', 'role', 'teacher')] == ['ana']

    def test_integrity_error_becomes_validation_error(self, store, create_user):
        create_user(username='ana')
        with pytest.raises(ValidationError):
            store.create_record('users', {'username': 'ana', 'password_hash': 'x', 'role': 'judge'})
        # Сессия после отката снова рабочая
        assert len(store.list_all('users')) == 1


def test_membership_lookup_merges_batches(store, create_project):
    projects = [create_project(name=f'P{i}') for i in range(23)]
    wanted = [p.id for p in projects[::2]]

    found = store.query_by_id_membership('projects', wanted)

    assert sorted(p.id for p in found) == sorted(wanted)
    assert store.batch_size == 10


def test_membership_lookup_respects_configured_batch_size(app, store, create_project, monkeypatch):
    projects = [create_project(name=f'P{i}') for i in range(5)]
    app.config['STORE_BATCH_SIZE'] = 2

    batches = []
    original = chunked

    def spy(items, size):
        for batch in original(items, size):
            batches.append(batch)
            yield batch

    monkeypatch.setattr('store.chunked', spy)
    store.query_by_id_membership('projects', [p.id for p in projects])

    assert [len(b) for b in batches] == [2, 2, 1]


class TestSetFields:
    def test_add_is_idempotent_and_visible_from_both_sides(self, store, create_user, create_project):
        judge = create_user()
        project = create_project()

        assert store.add_to_set_field('projects', project.id, 'assigned_judges', judge.id) is True
        assert store.add_to_set_field('users', judge.id, 'assigned_projects', project.id) is False

        assert JudgeAssignment.query.count() == 1
        assert store.get_by_id('projects', project.id).assigned_judge_ids == [judge.id]
        assert store.get_by_id('users', judge.id).assigned_project_ids == [project.id]

    def test_remove(self, store, create_user, create_project, assign):
        judge = create_user()
        project = create_project()
        assign(judge, project)

        assert store.remove_from_set_field('users', judge.id, 'assigned_projects', project.id) is True
        assert store.remove_from_set_field('users', judge.id, 'assigned_projects', project.id) is False
        assert store.get_by_id('projects', project.id).assigned_judge_ids == []

    def test_not_a_set_field(self, store, create_project):
        project = create_project()
        with pytest.raises(ValidationError):
            store.add_to_set_field('projects', project.id, 'name', 1)


class TestTransaction:
    def test_commits_once_at_the_end(self, store, create_user, create_project):
        judge = create_user()
        first, second = create_project(name='A'), create_project(name='B')

        with store.transaction():
            store.add_to_set_field('users', judge.id, 'assigned_projects', first.id)
            store.add_to_set_field('users', judge.id, 'assigned_projects', second.id)

        assert sorted(store.get_by_id('users', judge.id).assigned_project_ids) == [first.id, second.id]

    def test_rolls_back_everything_on_error(self, store, create_user, create_project):
        judge = create_user()
        project = create_project()

        with pytest.raises(NotFound):
            with store.transaction():
                store.add_to_set_field('users', judge.id, 'assigned_projects', project.id)
                store.get_by_id('projects', 9999)

        assert JudgeAssignment.query.count() == 0


def test_operational_error_becomes_store_unavailable(store, db, monkeypatch):
    def boom():
        raise OperationalError('COMMIT', {}, Exception('database is locked'))

    monkeypatch.setattr(db.session(), 'commit', boom)
    with pytest.raises(StoreUnavailable):
        store.create_record('projects', {'name': 'Robot'})


class TestDeletionCleanup:
    def test_deleting_judge_removes_assignments_but_keeps_evaluations(
            self, store, create_user, create_project, assign, create_evaluation):
        judge = create_user()
        project = create_project()
        assign(judge, project)
        evaluation = create_evaluation(judge, project, 80)

        store.delete_record('users', judge.id)

        assert JudgeAssignment.query.count() == 0
        kept = store.get_by_id('evaluations', evaluation.id)
        assert kept.judge_id is None
        assert kept.total_score == 80

    def test_deleting_project_removes_assignments_and_evaluations(
            self, store, create_user, create_project, assign, create_evaluation):
        judge = create_user()
        project = create_project()
        assign(judge, project)
        create_evaluation(judge, project, 80)

        store.delete_record('projects', project.id)

        assert JudgeAssignment.query.count() == 0
        assert Evaluation.query.count() == 0
        assert store.get_by_id('users', judge.id).assigned_project_ids == []
