from extensions import db


class JudgeAssignment(db.Model):
    """Связь судья <-> проект.

    Списки project.assigned_judge_ids и user.assigned_project_ids читаются
    из этой одной таблицы, поэтому разойтись они не могут.
    """
    __tablename__ = 'judge_assignments'
    id = db.Column(db.Integer, primary_key=True)
    judge_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    assigned_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    __table_args__ = (
        db.UniqueConstraint('judge_id', 'project_id', name='unique_judge_project'),
    )
