from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class MedicalGroup(str, Enum):
    BASIC = "basic"                # 기본
    PREPARATORY = "preparatory"    # 준비
    SPECIAL = "special"            # 특수


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Assessment(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    SATISFACTORY = "satisfactory"
    POOR = "poor"


# ✅ 학사 기간 (학년 시작 시점 4개 + 학기 8개 = 12개)
class PeriodOfStudy(str, Enum):
    COURSE_1_START = "course_1_start"
    SEMESTER_1 = "semester_1"
    SEMESTER_2 = "semester_2"
    COURSE_2_START = "course_2_start"
    SEMESTER_3 = "semester_3"
    SEMESTER_4 = "semester_4"
    COURSE_3_START = "course_3_start"
    SEMESTER_5 = "semester_5"
    SEMESTER_6 = "semester_6"
    COURSE_4_START = "course_4_start"
    SEMESTER_7 = "semester_7"
    SEMESTER_8 = "semester_8"


# ✅ 종목별 실기(컨트롤 운동) 11종 - 선언 순서가 곧 보고서 표시 순서
class ControlExercise(str, Enum):
    BASKETBALL_FREETHROW = "basketballFreethrow"
    BASKETBALL_DRIBBLE = "basketballDribble"
    BASKETBALL_LEADING = "basketballLeading"
    VOLLEYBALL_UPPER_PASS = "volleyballUpperPass"
    VOLLEYBALL_LOWER_PASS = "volleyballLowerPass"
    VOLLEYBALL_SERVE = "volleyballServe"
    SWIMMING_25M = "swimming25m"
    SWIMMING_50M = "swimming50m"
    SWIMMING_100M = "swimming100m"
    RUNNING_100M = "running100m"
    RUNNING_500M_1000M = "running500m1000m"


CONTROL_EXERCISE_TYPES_CAMEL = [e.value for e in ControlExercise]
