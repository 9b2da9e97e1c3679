from extensions import db
from sqlalchemy import CheckConstraint
from werkzeug.security import generate_password_hash, check_password_hash

ROLES = ('admin', 'teacher', 'judge')


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String, nullable=False)
    name = db.Column(db.String(150), nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    # Назначения удаляются вместе с судьей, оценки остаются (judge_id -> NULL)
    judge_assignments = db.relationship('JudgeAssignment', backref='judge', cascade="all, delete-orphan")
    evaluations = db.relationship('Evaluation', backref='judge')

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'teacher', 'judge')", name="check_role"),
    )

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def display_name(self):
        return self.name or self.username

    @property
    def assigned_project_ids(self):
        return [a.project_id for a in self.judge_assignments]

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'name': self.display_name,
            'role': self.role,
            'assigned_projects': self.assigned_project_ids,
        }
