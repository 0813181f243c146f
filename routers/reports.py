from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from dependencies.security import ensure_student_access, get_current_user, require_roles
from dependencies.storage import get_storage
from schemas.enums import UserRole
from schemas.reports import GroupSportReportEntry, MedicalGroupCount, PhysicalTestValue, SportReport
from schemas.users import User
from services.pdf_service import pdf_service
from services.report_service import (
    build_group_sport_report,
    build_physical_test_summary,
    build_sport_report,
    medical_group_distribution,
    period_label,
    total_score,
)
from services.storage.base import Storage

router = APIRouter(prefix="/reports", tags=["리포트"])

staff_only = require_roles(UserRole.ADMIN, UserRole.TEACHER)


def _sport_report(storage: Storage, student_id: int, period_id: Optional[int]) -> SportReport:
    scores = build_sport_report(student_id, period_id, storage.get_sport_results_by_student(student_id))
    return SportReport(student_id=student_id, period_id=period_id, scores=scores, total=total_score(scores))


def _require_student(storage: Storage, student_id: int):
    student = storage.get_student(student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


# ==========================================================
# [1단계] 학생 실기 점수 (차트 / PDF)
# ==========================================================

# ✅ [REPORT] 11종 실기 점수 (periodId 미지정 시 가장 마지막 기록)
@router.get("/sport/{student_id}", response_model=SportReport)
def sport_report(
    student_id: int,
    period_id: Optional[int] = Query(default=None, alias="periodId"),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    ensure_student_access(user, student_id)
    _require_student(storage, student_id)
    return _sport_report(storage, student_id, period_id)


# ✅ [PDF] 실기 점수 보고서 다운로드
@router.get("/sport/{student_id}/pdf")
def sport_report_pdf(
    student_id: int,
    period_id: Optional[int] = Query(default=None, alias="periodId"),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    ensure_student_access(user, student_id)
    student = _require_student(storage, student_id)
    period = storage.get_period(period_id) if period_id is not None else None
    if period_id is not None and period is None:
        raise HTTPException(status_code=404, detail="Period not found")

    report = _sport_report(storage, student_id, period_id)
    pdf_data = {
        "student": student,
        "group": storage.get_group(student.group_id) if student.group_id else None,
        "period_label": period_label(period.period_of_study if period else None),
        "scores": report.scores,
        "total": report.total,
        "generated_date": date.today().isoformat(),
    }
    pdf_content = pdf_service.generate_sport_report_pdf(pdf_data)
    return Response(
        content=pdf_content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=sport_report_{student_id}.pdf"},
    )


# ==========================================================
# [2단계] 그룹 / 체력 검사 / 의료 그룹
# ==========================================================

# ✅ [REPORT] 그룹 학생별 실기 점수표
@router.get("/group/{group_id}/period/{period_id}", response_model=List[GroupSportReportEntry])
def group_sport_report(
    group_id: int,
    period_id: int,
    _: User = Depends(staff_only),
    storage: Storage = Depends(get_storage),
):
    if storage.get_group(group_id) is None:
        raise HTTPException(status_code=404, detail="Group not found")
    students = storage.get_students_by_group(group_id)
    rows = storage.get_sport_results_by_period(period_id)
    return build_group_sport_report(students, rows, period_id)


# ✅ [REPORT] 일반 체력 검사 원점수 요약
@router.get("/physical-tests/{student_id}", response_model=List[PhysicalTestValue])
def physical_test_summary(
    student_id: int,
    period_id: Optional[int] = Query(default=None, alias="periodId"),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    ensure_student_access(user, student_id)
    _require_student(storage, student_id)
    return build_physical_test_summary(storage.get_physical_tests_by_student(student_id), period_id, student_id)


# ✅ [REPORT] 의료 그룹 분포 (전체 또는 그룹)
@router.get("/medical-groups", response_model=List[MedicalGroupCount])
def medical_groups(
    group_id: Optional[int] = Query(default=None, alias="groupId"),
    _: User = Depends(staff_only),
    storage: Storage = Depends(get_storage),
):
    students = storage.get_students_by_group(group_id) if group_id is not None else storage.get_all_students()
    return medical_group_distribution(students)
