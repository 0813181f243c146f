import pytest

from conftest import SEED_GROUP_ID, SEED_PERIOD_ID, SEED_STUDENT_ID
from services.pdf_service import pdf_service


@pytest.fixture
def recorded(teacher_client):
    """시드 학생의 1학기 기록: 자유투 5회, 수영 25m 18초"""
    resp = teacher_client.post("/api/sport-results", json={
        "studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID,
        "basketballFreethrow": 5, "swimming25m": "18",
    })
    assert resp.status_code == 201
    return resp.json()


def _scores(report):
    return {item["shortName"]: item["score"] for item in report["scores"]}


# ==========================================================
# [1] 학생 실기 점수
# ==========================================================
def test_sport_report_end_to_end(student_client, recorded):
    resp = student_client.get(f"/api/reports/sport/{SEED_STUDENT_ID}", params={"periodId": SEED_PERIOD_ID})

    assert resp.status_code == 200
    report = resp.json()
    assert report["studentId"] == SEED_STUDENT_ID
    assert report["periodId"] == SEED_PERIOD_ID
    assert len(report["scores"]) == 11
    scores = _scores(report)
    assert scores["Штрафные броски"] == 10
    assert scores["Плав. 25м"] == 10
    assert report["total"] == 20
    assert sum(scores.values()) == 20


def test_sport_report_for_period_without_records(admin_client, recorded):
    period = admin_client.post("/api/periods", json={"periodOfStudy": "semester_2"}).json()
    report = admin_client.get(f"/api/reports/sport/{SEED_STUDENT_ID}", params={"periodId": period["periodId"]}).json()
    assert report["total"] == 0
    assert all(item["score"] == 0 for item in report["scores"])


def test_sport_report_without_period_uses_latest_record(teacher_client, recorded):
    report = teacher_client.get(f"/api/reports/sport/{SEED_STUDENT_ID}").json()
    assert report["periodId"] is None
    assert report["total"] == 20


def test_sport_report_access(student_client, admin_client):
    other = admin_client.post("/api/students", json={"username": "anna", "password": "pw", "firstName": "Анна"}).json()
    assert student_client.get(f"/api/reports/sport/{other['studentId']}").status_code == 403
    assert admin_client.get("/api/reports/sport/999").status_code == 404


# ==========================================================
# [2] PDF
# ==========================================================
def test_sport_report_pdf(student_client, recorded, monkeypatch):
    rendered = {}

    def fake_pdf(html):
        rendered["html"] = html
        return b"%PDF-1.4 test"

    monkeypatch.setattr(pdf_service, "_html_to_pdf", fake_pdf)

    resp = student_client.get(f"/api/reports/sport/{SEED_STUDENT_ID}/pdf", params={"periodId": SEED_PERIOD_ID})

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == f"attachment; filename=sport_report_{SEED_STUDENT_ID}.pdf"
    assert resp.content == b"%PDF-1.4 test"
    assert "Петров Пётр Петрович" in rendered["html"]
    assert "1 семестр" in rendered["html"]
    assert "ФК-101" in rendered["html"]


def test_sport_report_pdf_unknown_period(student_client, monkeypatch):
    monkeypatch.setattr(pdf_service, "_html_to_pdf", lambda html: b"%PDF-1.4 test")
    resp = student_client.get(f"/api/reports/sport/{SEED_STUDENT_ID}/pdf", params={"periodId": 999})
    assert resp.status_code == 404
    assert resp.json()["message"] == "Period not found"


def test_sport_report_html_lists_every_exercise():
    html = pdf_service.render_sport_report_html({
        "student": {"full_name": "Петров"},
        "group": None,
        "period_label": "Все периоды",
        "scores": [{"exercise_name": "Плавание 25м", "score": 7}],
        "total": 7,
        "generated_date": "2024-09-15",
    })
    assert "Плавание 25м" in html
    assert "Все периоды" in html
    assert "Группа" not in html


# ==========================================================
# [3] 그룹 / 체력 검사 / 의료 그룹
# ==========================================================
def test_group_report(teacher_client, student_client, recorded):
    resp = teacher_client.get(f"/api/reports/group/{SEED_GROUP_ID}/period/{SEED_PERIOD_ID}")
    assert resp.status_code == 200
    entries = resp.json()
    assert [e["studentId"] for e in entries] == [SEED_STUDENT_ID]
    assert entries[0]["fullName"] == "Петров Пётр Петрович"
    assert entries[0]["total"] == 20

    assert teacher_client.get(f"/api/reports/group/999/period/{SEED_PERIOD_ID}").status_code == 404
    assert student_client.get(f"/api/reports/group/{SEED_GROUP_ID}/period/{SEED_PERIOD_ID}").status_code == 403


def test_physical_test_summary(student_client):
    student_client.post("/api/tests", json={"studentId": SEED_STUDENT_ID, "periodId": SEED_PERIOD_ID, "pushUps": 25})

    summary = student_client.get(
        f"/api/reports/physical-tests/{SEED_STUDENT_ID}", params={"periodId": SEED_PERIOD_ID},
    ).json()

    assert len(summary) == 9
    values = {item["key"]: item["value"] for item in summary}
    assert values["push_ups"] == 25
    assert values["plank"] is None


def test_medical_groups(admin_client, student_client):
    admin_client.post("/api/students", json={
        "username": "anna", "password": "pw", "firstName": "Анна",
        "groupId": SEED_GROUP_ID, "medicalGroup": "special",
    })

    counts = {c["medicalGroup"]: c["value"] for c in admin_client.get("/api/reports/medical-groups").json()}
    assert counts == {"basic": 1, "preparatory": 0, "special": 1}

    in_group = admin_client.get("/api/reports/medical-groups", params={"groupId": SEED_GROUP_ID}).json()
    assert sum(c["value"] for c in in_group) == 2

    assert student_client.get("/api/reports/medical-groups").status_code == 403
