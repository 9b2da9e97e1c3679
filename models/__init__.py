# models/__init__.py
# Инициализация моделей

from .user import User, ROLES
from .project import Project
from .judge_assignment import JudgeAssignment
from .evaluation import Evaluation
