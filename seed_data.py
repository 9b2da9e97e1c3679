from app import create_app
from extensions import db
from logic import submit_evaluation, sync_judge_assignment
from models import User, Project, JudgeAssignment, Evaluation
from store import evaluation_store as store

# Создаем экземпляр приложения, чтобы получить контекст
app = create_app()

with app.app_context():
    db.create_all()

    # --- 1. ОЧИСТКА ДАННЫХ ---
    print("Очистка старых данных...")
    # Идем в обратном порядке зависимостей
    db.session.query(Evaluation).delete()
    db.session.query(JudgeAssignment).delete()
    db.session.query(Project).delete()
    db.session.query(User).delete()
    db.session.commit()
    print("Очистка завершена.")

    # --- 2. СОЗДАНИЕ ДАННЫХ ---
    print("Добавление тестовых данных...")

    try:
        users = []
        for username, role, name in [
            ('admin', 'admin', 'Administrador'),
            ('profesor1', 'teacher', 'Prof. Mamani'),
            ('jurado1', 'judge', 'Jurado Quispe'),
            ('jurado2', 'judge', 'Jurado Choque'),
        ]:
            user = User(username=username, role=role, name=name)
            user.set_password('cambiar123')
            users.append(user)
        db.session.add_all(users)
        db.session.commit()
        admin, teacher, judge1, judge2 = users

        projects = [
            Project(name='Energía solar casera', course='PRIMERO A', advisors='Lic. Flores',
                    description='Ana Pérez, Luis Gómez', internal_grade=80),
            Project(name='Filtro de agua', course='PRIMERO B', advisors='Lic. Flores',
                    description='Carla Ríos, Mario Vargas', internal_grade=75),
            Project(name='Volcán químico', course='SEGUNDO A', advisors='Lic. Torrez',
                    description='Jorge Lima'),
            Project(name='Huerto vertical', course='SEXTO C', advisors='Ing. Rojas',
                    description='Sofía Cruz, Pablo Arce, Diana Soto', internal_grade=92),
        ]
        db.session.add_all(projects)
        db.session.commit()

        # Судьи назначаются через синхронизацию, чтобы обе стороны связи совпадали
        sync_judge_assignment(store, projects[0], [judge1.id, judge2.id])
        sync_judge_assignment(store, projects[1], [judge1.id])
        sync_judge_assignment(store, projects[2], [judge2.id])

        # Пример оценок
        submit_evaluation(store, judge1, projects[0], {
            'punctuality': 8, 'exposition': 22, 'materials': 20, 'triptych': 12, 'cleanliness': 8,
        })
        submit_evaluation(store, judge2, projects[0], {
            'punctuality': 10, 'exposition': 28, 'materials': 27, 'triptych': 17, 'cleanliness': 8,
        })
        submit_evaluation(store, judge2, projects[2], {
            'punctuality': 9, 'exposition': 25, 'materials': 25, 'triptych': 18, 'cleanliness': 10,
        })

        print("Тестовые данные успешно добавлены!")
    except Exception as e:
        db.session.rollback()
        print(f"Ошибка при добавлении данных: {e}")
        raise
