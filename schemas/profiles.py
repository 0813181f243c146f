from schemas.students import Student
from schemas.teachers import Teacher
from schemas.users import User


# ✅ /profile/* 응답 - 계정 정보 + 프로필 레코드
class StudentProfile(User):
    profile: Student


class TeacherProfile(User):
    profile: Teacher


# ✅ POST /students 응답 - 생성된 학생 계정 + 학생 레코드
class StudentAccount(User):
    student: Student
