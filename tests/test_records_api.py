import pytest

from conftest import SEED_GROUP_ID, SEED_PERIOD_ID, SEED_STUDENT_ID, SEED_TEACHER_ID


@pytest.fixture
def other_student(admin_client):
    """시드 학생과 같은 그룹의 두 번째 학생 (계정 포함)"""
    resp = admin_client.post("/api/students", json={
        "username": "anna", "password": "pw", "firstName": "Анна", "groupId": SEED_GROUP_ID,
    })
    assert resp.status_code == 201
    return resp.json()["studentId"]


# ==========================================================
# [1] 종목별 실기 기록
# ==========================================================
def test_student_records_own_sport_result(student_client):
    resp = student_client.post("/api/sport-results", json={
        "studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID,
        "basketballFreethrow": 5, "swimming25m": "18", "running100m": "",
    })
    assert resp.status_code == 201
    body = resp.json()
    # 숫자도 문자열로 저장, 빈 값은 null
    assert body["basketballFreethrow"] == "5"
    assert body["swimming25m"] == "18"
    assert body["running100m"] is None

    listed = student_client.get(f"/api/sport-results/{SEED_STUDENT_ID}").json()
    assert [r["sportResultId"] for r in listed] == [body["sportResultId"]]

    updated = student_client.put(f"/api/sport-results/{body['sportResultId']}", json={"swimming25m": "19.5"})
    assert updated.json()["swimming25m"] == "19.5"
    assert updated.json()["basketballFreethrow"] == "5"


def test_student_cannot_touch_other_students_results(student_client, teacher_client, other_student):
    created = teacher_client.post("/api/sport-results", json={"studentId": other_student, "periodId": SEED_PERIOD_ID})
    assert created.status_code == 201
    result_id = created.json()["sportResultId"]

    assert student_client.post("/api/sport-results", json={
        "studentId": other_student, "periodId": SEED_PERIOD_ID,
    }).status_code == 403
    assert student_client.get(f"/api/sport-results/{other_student}").status_code == 403
    assert student_client.get(f"/api/sport-results-id/{result_id}").status_code == 403
    assert student_client.put(f"/api/sport-results/{result_id}", json={"swimming25m": "1"}).status_code == 403
    assert student_client.delete(f"/api/sport-results/{result_id}").status_code == 403


def test_sport_results_reference_checks(teacher_client):
    missing_period = teacher_client.post("/api/sport-results", json={"studentId": SEED_STUDENT_ID, "periodId": 999})
    assert missing_period.status_code == 400
    assert missing_period.json()["message"] == "Period not found"

    missing_student = teacher_client.post("/api/sport-results", json={"studentId": 999, "periodId": SEED_PERIOD_ID})
    assert missing_student.json()["message"] == "Student not found"

    assert teacher_client.get("/api/sport-results-id/999").status_code == 404
    assert teacher_client.delete("/api/sport-results/999").status_code == 404


def test_sport_results_by_period_and_teacher(teacher_client, student_client, other_student):
    teacher_client.post("/api/sport-results", json={"studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID})
    teacher_client.post("/api/sport-results", json={"studentId": other_student, "periodId": SEED_PERIOD_ID})

    assert len(teacher_client.get(f"/api/sport-results-period/{SEED_PERIOD_ID}").json()) == 2
    own = teacher_client.get(f"/api/sport-results-teacher/{SEED_TEACHER_ID}/period/{SEED_PERIOD_ID}").json()
    assert sorted(r["studentId"] for r in own) == [SEED_STUDENT_ID, other_student]
    assert teacher_client.get(f"/api/sport-results-teacher/999/period/{SEED_PERIOD_ID}").json() == []

    assert student_client.get(f"/api/sport-results-period/{SEED_PERIOD_ID}").status_code == 403


# ==========================================================
# [2] 일반 체력 검사 (/tests = /physical-tests)
# ==========================================================
def test_physical_test_path_aliases(student_client, admin_client):
    created = student_client.post("/api/tests", json={
        "studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID, "pushUps": 20, "date": "2024-09-15",
    })
    assert created.status_code == 201
    test_id = created.json()["testId"]

    same = student_client.post("/api/physical-tests", json={"studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID})
    assert same.status_code == 201

    updated = student_client.put(f"/api/physical-tests/{test_id}", json={"plank": 60.5})
    assert updated.json()["plank"] == 60.5
    assert updated.json()["pushUps"] == 20
    assert student_client.get(f"/api/physical-tests-id/{test_id}").json()["date"] == "2024-09-15"

    assert [t["testId"] for t in student_client.get("/api/tests").json()] == [test_id, same.json()["testId"]]
    assert len(admin_client.get("/api/tests").json()) == 2

    assert student_client.delete(f"/api/tests/{test_id}").status_code == 204
    assert student_client.get(f"/api/physical-tests-id/{test_id}").status_code == 404


def test_teacher_sees_tests_of_own_groups(admin_client, teacher_client):
    faculty = admin_client.post("/api/faculties", json={"name": "Другой"}).json()
    group = admin_client.post("/api/groups", json={"name": "X-1", "facultyId": faculty["facultyId"]}).json()
    outsider = admin_client.post("/api/students", json={
        "username": "outsider", "password": "pw", "firstName": "Олег", "groupId": group["groupId"],
    }).json()

    admin_client.post("/api/tests", json={"studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID, "pushUps": 10})
    admin_client.post("/api/tests", json={"studentId": outsider["studentId"], "periodId": SEED_PERIOD_ID, "pushUps": 30})

    assert [t["pushUps"] for t in teacher_client.get("/api/tests").json()] == [10]
    assert [t["pushUps"] for t in teacher_client.get(f"/api/tests/all/{SEED_TEACHER_ID}").json()] == [10]
    assert len(admin_client.get(f"/api/tests/all/{SEED_TEACHER_ID}").json()) == 2


def test_physical_test_needs_existing_period(student_client):
    resp = student_client.post("/api/tests", json={"studentId": SEED_STUDENT_ID, "periodId": 42})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Period not found"


# ==========================================================
# [3] 신체 측정 (/samples = /physical-states)
# ==========================================================
def test_physical_state_path_aliases(student_client, teacher_client, other_student):
    created = student_client.post("/api/samples", json={"studentId": SEED_STUDENT_ID, "height": 180, "weight": 75})
    assert created.status_code == 201
    state_id = created.json()["stateId"]
    assert created.json()["periodId"] is None

    updated = student_client.put(f"/api/samples/{state_id}", json={"weight": 77.5})
    assert updated.json()["height"] == 180
    assert updated.json()["weight"] == 77.5

    teacher_client.post("/api/physical-states", json={"studentId": other_student, "height": 165})

    assert [s["stateId"] for s in student_client.get("/api/samples").json()] == [state_id]
    assert len(teacher_client.get("/api/samples").json()) == 2
    assert len(teacher_client.get("/api/samples/all").json()) == 2
    assert student_client.get("/api/samples/all").status_code == 403
    assert student_client.get(f"/api/physical-states/{other_student}").status_code == 403

    assert student_client.delete(f"/api/samples/{state_id}").status_code == 204


# ==========================================================
# [4] 종합 평가
# ==========================================================
def test_teacher_result_defaults_assessor(teacher_client, student_client):
    resp = teacher_client.post("/api/results", json={
        "studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID, "assessment": "good", "comments": "Молодец",
    })
    assert resp.status_code == 201
    result = resp.json()
    assert result["assessedBy"] == SEED_TEACHER_ID
    assert result["assessedAt"] is not None

    assert student_client.get(f"/api/results/student/{SEED_STUDENT_ID}").json()[0]["assessment"] == "good"
    assert student_client.post("/api/results", json={
        "studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID,
    }).status_code == 403

    assert [r["resultId"] for r in teacher_client.get(f"/api/results/group/{SEED_GROUP_ID}").json()] == [result["resultId"]]
    assert len(teacher_client.get(f"/api/results/period/{SEED_PERIOD_ID}").json()) == 1

    updated = teacher_client.put(f"/api/results/{result['resultId']}", json={"assessment": "excellent"})
    assert updated.json()["assessment"] == "excellent"
    assert updated.json()["comments"] == "Молодец"


def test_result_references_and_delete(teacher_client, admin_client):
    bad = teacher_client.post("/api/results", json={
        "studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID, "sportResultId": 999,
    })
    assert bad.status_code == 400
    assert bad.json()["message"] == "Sport result not found"

    bad_assessment = teacher_client.post("/api/results", json={
        "studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID, "assessment": "brilliant",
    })
    assert bad_assessment.status_code == 400

    sport = teacher_client.post("/api/sport-results", json={"studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID}).json()
    result = teacher_client.post("/api/results", json={
        "studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID, "sportResultId": sport["sportResultId"],
    }).json()

    # 평가가 참조하는 실기 기록은 지울 수 없음
    assert teacher_client.delete(f"/api/sport-results/{sport['sportResultId']}").status_code == 400

    assert teacher_client.delete(f"/api/results/{result['resultId']}").status_code == 403
    assert admin_client.delete(f"/api/results/{result['resultId']}").status_code == 204
    assert admin_client.delete(f"/api/results/{result['resultId']}").status_code == 404
    assert teacher_client.delete(f"/api/sport-results/{sport['sportResultId']}").status_code == 204
