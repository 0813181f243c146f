from conftest import CREDENTIALS, STUDENT_USER_ID, login
from utils.security import hash_password, verify_password


def test_password_hashing():
    hashed = hash_password("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)
    # 해시 형식이 아닌 값은 예외 없이 불일치
    assert not verify_password("secret", "secret")
    assert not verify_password("", hashed)


# ==========================================================
# [1] 로그인 / 로그아웃 / 현재 사용자
# ==========================================================
def test_login_returns_user_without_password(client):
    resp = client.post("/api/login", json={"username": "student", "password": "student123"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == STUDENT_USER_ID
    assert body["role"] == "student"
    assert body["studentId"] == 1
    assert "password" not in body


def test_login_with_wrong_password(client):
    resp = client.post("/api/login", json={"username": "admin", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Incorrect username or password"}


def test_login_unknown_user(client):
    resp = client.post("/api/login", json={"username": "ghost", "password": "x"})
    assert resp.status_code == 401


def test_current_user_requires_session(client):
    resp = client.get("/api/user")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Not authenticated"}


def test_session_round_trip(client):
    login(client, *CREDENTIALS["teacher"])
    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["username"] == "teacher"
    assert me.json()["teacherId"] == 1

    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/user").status_code == 401


def test_invalid_body_is_a_400_with_field_errors(client):
    resp = client.post("/api/login", json={"username": "admin"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid request data"
    assert body["errors"]


# ==========================================================
# [2] 회원가입
# ==========================================================
def test_register_logs_the_new_user_in(client):
    resp = client.post("/api/register", json={
        "username": "newteacher", "password": "pw12345", "role": "teacher", "fullName": "Новый Учитель",
    })
    assert resp.status_code == 201
    assert resp.json()["fullName"] == "Новый Учитель"
    assert "password" not in resp.json()

    assert client.get("/api/user").json()["username"] == "newteacher"


def test_register_duplicate_username(client):
    resp = client.post("/api/register", json={"username": "teacher", "password": "x", "role": "teacher"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Username already exists"


def test_register_cannot_create_admin(client):
    resp = client.post("/api/register", json={"username": "root", "password": "x", "role": "admin"})
    assert resp.status_code == 403


def test_register_rejects_unknown_role(client):
    resp = client.post("/api/register", json={"username": "x", "password": "x", "role": "janitor"})
    assert resp.status_code == 400


def test_seeded_passwords_are_stored_hashed(db_storage):
    admin = db_storage.get_user_by_username("admin")
    assert admin.password != "admin123"
    assert verify_password("admin123", admin.password)
