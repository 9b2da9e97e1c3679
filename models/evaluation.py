from extensions import db
from sqlalchemy import CheckConstraint


class Evaluation(db.Model):
    __tablename__ = 'evaluations'
    id = db.Column(db.Integer, primary_key=True)
    judge_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)

    # Критерии рубрики, максимумы см. logic/rubric.py
    punctuality = db.Column(db.Integer, nullable=False, default=0)
    exposition = db.Column(db.Integer, nullable=False, default=0)
    materials = db.Column(db.Integer, nullable=False, default=0)
    triptych = db.Column(db.Integer, nullable=False, default=0)
    cleanliness = db.Column(db.Integer, nullable=False, default=0)

    total_score = db.Column(db.Integer, nullable=False, default=0)
    scored_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    __table_args__ = (
        db.UniqueConstraint('judge_id', 'project_id', name='unique_evaluation'),
        CheckConstraint("total_score BETWEEN 0 AND 100", name="check_total_score"),
    )

    @property
    def scores(self):
        return {
            'punctuality': self.punctuality,
            'exposition': self.exposition,
            'materials': self.materials,
            'triptych': self.triptych,
            'cleanliness': self.cleanliness,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'judge_id': self.judge_id,
            'project_id': self.project_id,
            'scores': self.scores,
            'total_score': self.total_score,
            'scored_at': self.scored_at.isoformat() if self.scored_at else None,
        }
