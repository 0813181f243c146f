import pytest

from schemas.enums import CONTROL_EXERCISE_TYPES_CAMEL, ControlExercise
from services.scoring import EXERCISE_CATALOG, SCORE_TABLES, parse_raw_value, score


# ==========================================================
# [1] 구간 경계값 - 종목별 대표 사례
# ==========================================================
@pytest.mark.parametrize("key, raw, expected", [
    # 농구 자유투 (>=)
    ("basketballFreethrow", "5", 10),
    ("basketballFreethrow", "7", 10),
    ("basketballFreethrow", "4", 7),
    ("basketballFreethrow", "3", 5),
    ("basketballFreethrow", "2", 3),
    ("basketballFreethrow", "1", 1),
    ("basketballFreethrow", "0", 1),
    ("basketballDribble", "4", 8),
    ("basketballDribble", "1", 1),
    ("basketballLeading", "1", 2),
    ("basketballLeading", "0", 1),
    # 배구
    ("volleyballUpperPass", "20", 10),
    ("volleyballUpperPass", "19", 9),
    ("volleyballUpperPass", "4", 2),
    ("volleyballUpperPass", "3", 1),
    ("volleyballLowerPass", "16", 10),
    ("volleyballLowerPass", "5", 4),
    ("volleyballLowerPass", "2", 1),
    ("volleyballServe", "9", 10),
    ("volleyballServe", "1", 2),
    ("volleyballServe", "0", 1),
    # 수영 25m (<=, 1.5초 간격)
    ("swimming25m", "18", 10),
    ("swimming25m", "18.1", 9),
    ("swimming25m", "19.5", 9),
    ("swimming25m", "30", 2),
    ("swimming25m", "30.1", 1),
    ("swimming25m", "31.5", 1),
    ("swimming50m", "40", 10),
    ("swimming50m", "70", 2),
    ("swimming50m", "71", 1),
    ("swimming100m", "90", 10),
    ("swimming100m", "156", 1),
    # 달리기 100m (0.2초 간격)
    ("running100m", "13.0", 10),
    ("running100m", "13.1", 9),
    ("running100m", "13.2", 9),
    ("running100m", "14.6", 2),
    ("running100m", "14.7", 1),
    ("running500m1000m", "200", 10),
    ("running500m1000m", "205", 9),
    ("running500m1000m", "280", 2),
    ("running500m1000m", "281", 1),
])
def test_threshold_boundaries(key, raw, expected):
    assert score(key, raw) == expected


def test_numbers_and_strings_score_the_same():
    assert score("swimming25m", 18) == score("swimming25m", "18") == 10
    assert score("basketballFreethrow", 4.0) == 7


def test_enum_key_is_accepted():
    assert score(ControlExercise.SWIMMING_25M, "18") == 10


# ==========================================================
# [2] 값 없음 / 해석 불가 → 0점
# ==========================================================
@pytest.mark.parametrize("key", CONTROL_EXERCISE_TYPES_CAMEL)
@pytest.mark.parametrize("raw", [None, "", "   ", "not-a-number", "abc12", True, "nan", float("inf"), [], {}])
def test_missing_or_invalid_value_scores_zero(key, raw):
    assert score(key, raw) == 0


def test_unknown_key_scores_zero():
    assert score("longJump", "250") == 0
    assert score("", "5") == 0


def test_leading_number_is_parsed():
    assert parse_raw_value("18.5s") == 18.5
    assert parse_raw_value(" 42 ") == 42.0
    assert parse_raw_value(".5") == 0.5
    assert score("swimming25m", "18.5s") == 9


# ==========================================================
# [3] 횟수형 패스 (구간표 없음) → round(value / 2), 1~10
# ==========================================================
@pytest.mark.parametrize("raw, expected", [
    ("10", 5),
    ("5", 3),     # 2.5 → 3
    ("3", 2),     # 1.5 → 2
    ("1", 1),
    ("0", 1),
    ("40", 10),
])
def test_solo_pass_uses_generic_rule(raw, expected):
    assert score("volleyballSoloPass", raw) == expected
    assert score("volleyballPass", raw) == expected


def test_solo_pass_without_value_scores_zero():
    assert score("volleyballSoloPass", None) == 0


# ==========================================================
# [4] 성질: 범위 / 단조성
# ==========================================================
@pytest.mark.parametrize("key", CONTROL_EXERCISE_TYPES_CAMEL)
def test_scores_stay_in_range(key):
    for tenth in range(0, 4000, 7):
        value = tenth / 10
        assert 1 <= score(key, value) <= 10


@pytest.mark.parametrize("key", CONTROL_EXERCISE_TYPES_CAMEL)
def test_scores_are_monotonic_in_better_direction(key):
    table = SCORE_TABLES[key]
    values = [v / 10 for v in range(0, 4000, 3)]
    scores = [score(key, v) for v in values]
    if not table.higher_is_better:
        scores.reverse()
    assert scores == sorted(scores)


def test_every_catalog_key_has_a_table():
    assert [item.key for item in EXERCISE_CATALOG] == CONTROL_EXERCISE_TYPES_CAMEL
    assert set(SCORE_TABLES) == set(CONTROL_EXERCISE_TYPES_CAMEL)
    assert len(EXERCISE_CATALOG) == 11
