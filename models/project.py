# models/project.py

from extensions import db
from sqlalchemy import CheckConstraint


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    # В отчете для учеников описание читается как список учеников через запятую
    description = db.Column(db.Text, nullable=True)
    course = db.Column(db.String(100), nullable=True, index=True)
    advisors = db.Column(db.String(255), nullable=False, default='N/A')
    # Оценка учителя 0..100, NULL - еще не выставлена
    internal_grade = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    judge_assignments = db.relationship('JudgeAssignment', backref='project', cascade="all, delete-orphan")
    evaluations = db.relationship('Evaluation', backref='project', cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("internal_grade IS NULL OR (internal_grade >= 0 AND internal_grade <= 100)",
                        name="check_internal_grade"),
    )

    @property
    def assigned_judge_ids(self):
        return [a.judge_id for a in self.judge_assignments]

    @property
    def students(self):
        if not self.description:
            return []
        return [part.strip() for part in self.description.split(',') if part.strip()]

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'course': self.course,
            'advisors': self.advisors,
            'internal_grade': self.internal_grade,
            'assigned_judges': self.assigned_judge_ids,
        }
