"""점수 비율 → 등급"""

from .models import RelicGrade

# (비율 하한 %, 등급) 높은 순
GRADE_THRESHOLDS: tuple[tuple[float, RelicGrade], ...] = (
    (95, RelicGrade.WTF),
    (80, RelicGrade.SSS),
    (70, RelicGrade.SS),
    (60, RelicGrade.S),
    (50, RelicGrade.A),
    (40, RelicGrade.B),
    (30, RelicGrade.C),
    (20, RelicGrade.D),
    (10, RelicGrade.E),
)


def get_relic_grade(ideal_score: float, actual_score: float) -> RelicGrade:
    """이상 점수 대비 실제 점수 등급. 어느 한쪽이라도 0 이하면 F."""
    if ideal_score <= 0 or actual_score <= 0:
        return RelicGrade.F

    percentage = actual_score / ideal_score * 100
    for threshold, grade in GRADE_THRESHOLDS:
        if percentage >= threshold:
            return grade
    return RelicGrade.F
