"""
services/scoring.py

종목별 실기(컨트롤 운동) 원기록 → 1~10점 환산.

- 종목마다 손으로 정한 구간표(threshold table)를 그대로 사용한다. 공식으로 유도하지 않는다.
- 횟수/거리 종목: 값이 클수록 높은 점수 (>= 비교, 높은 기준부터 검사)
- 시간 종목(수영/달리기): 값이 작을수록 높은 점수 (<= 비교, 낮은 기준부터 검사)
- 첫 번째로 만족하는 구간에서 바로 결정되며, 어느 구간에도 들지 못하면 1점.
- 값이 없거나(None, "") 숫자가 아니면 0점. 예외는 던지지 않는다.
"""

import math
import re
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from schemas.enums import ControlExercise

# 구간에 하나도 걸리지 않은 기록의 점수
FLOOR_SCORE = 1
# 기록 없음 / 해석 불가
NO_SCORE = 0


class ScoreTable(NamedTuple):
    higher_is_better: bool
    steps: Tuple[Tuple[float, int], ...]   # (기준값, 점수) - 검사 순서대로


def _ascending(*steps: Tuple[float, int]) -> ScoreTable:
    return ScoreTable(True, steps)


def _descending(*steps: Tuple[float, int]) -> ScoreTable:
    return ScoreTable(False, steps)


# ==========================================================
# [종목별 구간표]
# ==========================================================
# 구간 값은 학과 평가 기준(정책 값)이며 공식에서 나온 값이 아님.
# 자유투, 수영 25m(1.5초 간격), 달리기 100m(0.2초 간격)의 간격만 기존 채점표와 같고
# 나머지 종목 구간과 달리기 100m 시작값(13.0초)은 이 서비스에서 정한 값이다.
SCORE_TABLES: Dict[str, ScoreTable] = {
    # 농구 - 자유투 성공 수 (10회 중)
    ControlExercise.BASKETBALL_FREETHROW.value: _ascending(
        (5, 10), (4, 7), (3, 5), (2, 3),
    ),
    # 농구 - 투스텝 슛 성공 수
    ControlExercise.BASKETBALL_DRIBBLE.value: _ascending(
        (5, 10), (4, 8), (3, 6), (2, 4),
    ),
    # 농구 - 빠른 드리블 기술 평가 (0~5)
    ControlExercise.BASKETBALL_LEADING.value: _ascending(
        (5, 10), (4, 8), (3, 6), (2, 4), (1, 2),
    ),
    # 배구 - 2인 오버핸드 패스 연속 횟수
    ControlExercise.VOLLEYBALL_UPPER_PASS.value: _ascending(
        (20, 10), (18, 9), (16, 8), (14, 7), (12, 6), (10, 5), (8, 4), (6, 3), (4, 2),
    ),
    # 배구 - 2인 언더핸드 패스 연속 횟수
    ControlExercise.VOLLEYBALL_LOWER_PASS.value: _ascending(
        (16, 10), (14, 9), (12, 8), (10, 7), (8, 6), (6, 5), (5, 4), (4, 3), (3, 2),
    ),
    # 배구 - 서브 성공 수 (10회 중)
    ControlExercise.VOLLEYBALL_SERVE.value: _ascending(
        (9, 10), (8, 9), (7, 8), (6, 7), (5, 6), (4, 5), (3, 4), (2, 3), (1, 2),
    ),
    # 수영 25m (초) - 1.5초 간격
    ControlExercise.SWIMMING_25M.value: _descending(
        (18, 10), (19.5, 9), (21, 8), (22.5, 7), (24, 6), (25.5, 5), (27, 4), (28.5, 3), (30, 2),
    ),
    # 수영 50m (초)
    ControlExercise.SWIMMING_50M.value: _descending(
        (40, 10), (43, 9), (46, 8), (50, 7), (54, 6), (58, 5), (62, 4), (66, 3), (70, 2),
    ),
    # 수영 100m (초)
    ControlExercise.SWIMMING_100M.value: _descending(
        (90, 10), (97, 9), (104, 8), (111, 7), (118, 6), (125, 5), (135, 4), (145, 3), (155, 2),
    ),
    # 달리기 100m (초) - 0.2초 간격
    ControlExercise.RUNNING_100M.value: _descending(
        (13.0, 10), (13.2, 9), (13.4, 8), (13.6, 7), (13.8, 6), (14.0, 5), (14.2, 4), (14.4, 3), (14.6, 2),
    ),
    # 달리기 500m(여) / 1000m(남) (초)
    ControlExercise.RUNNING_500M_1000M.value: _descending(
        (200, 10), (210, 9), (220, 8), (230, 7), (240, 6), (250, 5), (260, 4), (270, 3), (280, 2),
    ),
}

# 구간표가 없는 패스 횟수류 기록 → 일반 규칙 round(value / 2), 1~10 으로 제한
PASS_COUNT_KEYS = frozenset({"volleyballSoloPass", "volleyballPass"})


# ==========================================================
# [보고서 표시 카탈로그] - 11종, 고정 순서
# ==========================================================
class ExerciseDescriptor(NamedTuple):
    key: str
    name: str          # 전체 명칭
    short_name: str    # 차트 축 라벨


EXERCISE_CATALOG: List[ExerciseDescriptor] = [
    ExerciseDescriptor("basketballFreethrow", "Штрафные броски", "Штрафные броски"),
    ExerciseDescriptor("basketballDribble", "Двухшажная техника", "Двухшажная"),
    ExerciseDescriptor("basketballLeading", "Техника быстрого ведения мяча", "Ведение мяча"),
    ExerciseDescriptor("volleyballUpperPass", "Верхняя передача мяча в парах", "Верх. передача"),
    ExerciseDescriptor("volleyballLowerPass", "Нижняя передача мяча в парах", "Ниж. передача"),
    ExerciseDescriptor(
        "volleyballServe",
        "Верхняя подача мяча через сетку (юноши).\n"
        "Верхняя, нижняя, боковая подача мяча через сетку (девушки)",
        "Подача",
    ),
    ExerciseDescriptor("swimming25m", "Плавание 25 м", "Плав. 25м"),
    ExerciseDescriptor("swimming50m", "Плавание 50 м", "Плав. 50м"),
    ExerciseDescriptor("swimming100m", "Плавание 100 м", "Плав. 100м"),
    ExerciseDescriptor("running100m", "Бег 100 м", "Бег 100м"),
    ExerciseDescriptor("running500m1000m", "Бег 500 (девушки)\n1000 м (юноши)", "Бег 500/1000м"),
]

# 앞부분 숫자만 읽는다 ("18.5s" → 18.5, "abc" → 해석 불가)
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_raw_value(raw: Any) -> Optional[float]:
    """폼 원기록(문자열/숫자/None)을 숫자로 변환. 해석할 수 없으면 None"""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        match = _LEADING_NUMBER.match(raw)
        if not match:
            return None
        value = float(match.group(1))
    else:
        return None
    return value if math.isfinite(value) else None


def _lookup(table: ScoreTable, value: float) -> int:
    for threshold, points in table.steps:
        if table.higher_is_better and value >= threshold:
            return points
        if not table.higher_is_better and value <= threshold:
            return points
    return FLOOR_SCORE


def _pass_count_score(value: float) -> int:
    # 0.5는 올림 (2.5 → 3)
    return max(1, min(10, math.floor(value / 2 + 0.5)))


def score(exercise_key: Any, raw_value: Any) -> int:
    """
    종목 키 + 원기록 → 0~10 정수 점수

    - exercise_key: camelCase 키 문자열 또는 ControlExercise
    - raw_value: "18", 18, 18.0, None, "" ...
    """
    key = getattr(exercise_key, "value", exercise_key)
    value = parse_raw_value(raw_value)
    if value is None:
        return NO_SCORE

    table = SCORE_TABLES.get(key)
    if table is not None:
        return _lookup(table, value)
    if key in PASS_COUNT_KEYS:
        return _pass_count_score(value)
    return NO_SCORE
