# logic/__init__.py
# Подсчет результатов: сведение оценок, шкалы, группировка, назначения судей

from .aggregation import JuryAggregate, aggregate, aggregate_all
from .scaling import ScalingPolicy, GradeStatus, ScaledGrade, scale
from .grouping import GroupingStrategy, RankKey, CourseGroup, group_and_rank, rank, subgroup_by_course
from .assignments import SyncResult, sync_judge_assignment, judge_progress
from .rubric import CRITERIA, clamp_score, clamp_scores, total_score, parse_internal_grade, submit_evaluation
from .reports import REPORTS, ConsolidatedResult, build_report, load_report
