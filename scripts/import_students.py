import argparse

from database.db import SessionLocal, init_db
from services.storage.sql_storage import DatabaseStorage
from services.student_import import import_students_csv

CSV_PATH = "data/students.csv"  # ✅ 기본 파일 경로 (firstName,lastName,patronymic,username,password)


def migrate_students(csv_path: str, group_id: int):
    init_db()
    db = SessionLocal()
    try:
        with open(csv_path, "rb") as csvfile:
            results = import_students_csv(DatabaseStorage(db), csvfile.read(), group_id)
    finally:
        db.close()

    for row in results:
        mark = "✅" if row.success else "⚠️"
        print(f"{mark} {row.username or '-'}: {row.message}")
    imported = sum(1 for r in results if r.success)
    print(f"✅ 학생 CSV → DB 등록 완료 ({imported}/{len(results)})")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="학생 CSV 일괄 등록")
    parser.add_argument("group_id", type=int, help="배정할 그룹 ID")
    parser.add_argument("--csv", default=CSV_PATH, help="CSV 파일 경로")
    args = parser.parse_args()
    migrate_students(args.csv, args.group_id)
