# logic/scaling.py
# Пересчет оценки учителя и среднего балла жюри в итоговую оценку

import enum
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from .aggregation import JuryAggregate

MAX_TOTAL_POINTS = 200          # оценка учителя (100) + среднее жюри (100)
MAX_FINAL_GRADE = 5.0
SUM_CONVERSION_FACTOR = MAX_FINAL_GRADE / MAX_TOTAL_POINTS      # 0.025
INDEPENDENT_CONVERSION_FACTOR = Decimal('5.0') / Decimal('100')  # 0.05


class ScalingPolicy(enum.Enum):
    RAW_100 = 'raw_100'
    SUM_TO_5 = 'sum_to_5'
    INDEPENDENT_TO_5 = 'independent_to_5'


class GradeStatus(enum.Enum):
    FINAL = 'final'
    MISSING_JURY = 'missing_jury'
    MISSING_INTERNAL = 'missing_internal'
    PENDING = 'pending'


@dataclass(frozen=True)
class ScaledGrade:
    scaled_internal: Optional[float]
    scaled_jury: Optional[float]
    final_grade: Optional[float]
    total_points: float
    status: GradeStatus

    @property
    def is_final(self):
        return self.final_grade is not None

    def to_dict(self):
        return {
            'scaled_internal': self.scaled_internal,
            'scaled_jury': self.scaled_jury,
            'final_grade': self.final_grade,
            'total_points': self.total_points,
            'status': self.status.value,
        }


def grade_status(internal_grade, jury):
    has_internal = internal_grade > 0
    if has_internal and jury.is_evaluated:
        return GradeStatus.FINAL
    if has_internal:
        return GradeStatus.MISSING_JURY
    if jury.is_evaluated:
        return GradeStatus.MISSING_INTERNAL
    return GradeStatus.PENDING


def _grade_value(value):
    """Число для расчета; пусто, мусор, NaN и бесконечность считаются 0 (не оценено)."""
    try:
        number = float(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _round_half_up(value):
    return int(Decimal(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _scale_raw(internal_grade, jury):
    return internal_grade, jury.average, None


def _scale_sum_to_5(internal_grade, jury):
    final_grade = None
    # Итог считается только когда есть обе оценки, частичный результат не показываем
    if internal_grade > 0 and jury.is_evaluated:
        final_grade = min((internal_grade + jury.average) * SUM_CONVERSION_FACTOR, MAX_FINAL_GRADE)
    return internal_grade, jury.average, final_grade


def _scale_independent(internal_grade, jury):
    # 0 здесь означает "еще не оценено"
    def scale_one(value):
        if not value:
            return None
        return _round_half_up(Decimal(str(value)) * INDEPENDENT_CONVERSION_FACTOR)

    return scale_one(internal_grade), scale_one(jury.average), None


_POLICIES = {
    ScalingPolicy.RAW_100: _scale_raw,
    ScalingPolicy.SUM_TO_5: _scale_sum_to_5,
    ScalingPolicy.INDEPENDENT_TO_5: _scale_independent,
}


def scale(policy, internal_grade, jury=None):
    """
    Пересчитывает оценки по выбранной политике. Никогда не бросает исключений:
    если данных не хватает, итоговая оценка = None (в ожидании).
    """
    policy = ScalingPolicy(policy)
    internal_grade = _grade_value(internal_grade)
    jury = jury or JuryAggregate()

    scaled_internal, scaled_jury, final_grade = _POLICIES[policy](internal_grade, jury)
    return ScaledGrade(
        scaled_internal=scaled_internal,
        scaled_jury=scaled_jury,
        final_grade=final_grade,
        total_points=internal_grade + jury.average,
        status=grade_status(internal_grade, jury),
    )
