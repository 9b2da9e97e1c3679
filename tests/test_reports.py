import pytest

from errors import NotFound
from models import Evaluation, Project
from logic.reports import build_report


@pytest.fixture
def fair():
    projects = [
        Project(id=1, name='Energía solar', course='PRIMERO A', internal_grade=80,
                description='Ana, Luis', advisors='Lic. Flores'),
        Project(id=2, name='Filtro de agua', course='PRIMERO B', internal_grade=None,
                description='Carla', advisors='N/A'),
        Project(id=3, name='Volcán', course='SEGUNDOS', internal_grade=70, advisors='N/A'),
        Project(id=4, name='Huerto', course='Taller', internal_grade=90, advisors='N/A'),
    ]
    evaluations = [
        Evaluation(project_id=1, judge_id=10, total_score=70),
        Evaluation(project_id=1, judge_id=11, total_score=90),
        Evaluation(project_id=2, judge_id=10, total_score=95),
        Evaluation(project_id=4, judge_id=11, total_score=50),
    ]
    return projects, evaluations


def test_admin_report_is_flat_ranking_on_raw_scale(fair):
    report = build_report('admin', *fair)

    assert report['policy'] == 'raw_100'
    assert [r['project_id'] for r in report['results']] == [2, 1, 4, 3]
    first = report['results'][1]
    assert first['jury_average'] == 80
    assert first['scaled_internal'] == 80
    assert first['evaluations'] == 2


def test_professor_report_groups_exactly_and_ranks_by_final_grade(fair):
    report = build_report('professor', *fair)

    assert [g['course'] for g in report['groups']] == ['SEGUNDOS', 'PRIMERO A', 'PRIMERO B', 'TALLER']
    by_id = {r['project_id']: r for g in report['groups'] for r in g['results']}
    assert by_id[1]['final_grade'] == pytest.approx(4.0)
    assert by_id[1]['total_points'] == 160
    assert by_id[2]['final_grade'] is None
    assert by_id[2]['total_points'] == 95
    assert by_id[2]['status'] == 'missing_internal'
    assert by_id[3]['status'] == 'missing_jury'


def test_students_report_only_evaluated_with_subgroups(fair):
    report = build_report('students', *fair)

    assert [g['course'] for g in report['groups']] == ['PRIMEROS', 'OTHER']
    primeros = report['groups'][0]
    assert [r['project_id'] for r in primeros['results']] == [2, 1]
    assert [c['course'] for c in primeros['courses']] == ['PRIMERO A', 'PRIMERO B']

    project_1 = primeros['courses'][0]['results'][0]
    assert project_1['students'] == ['Ana', 'Luis']
    assert project_1['scaled_internal'] == 4
    assert project_1['scaled_jury'] == 4

    project_2 = primeros['courses'][1]['results'][0]
    assert project_2['scaled_internal'] is None
    assert project_2['scaled_jury'] == 5


def test_unknown_report(fair):
    with pytest.raises(NotFound):
        build_report('parents', *fair)
