import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from projectmanager.database import build_engine, init_db, session_scope


def test_schema_matches_persisted_layout(engine):
    inspector = inspect(engine)

    assert set(inspector.get_table_names()) == {"users", "projects", "project_members"}
    assert [c["name"] for c in inspector.get_columns("users")] == [
        "user_id",
        "username",
        "email",
        "password",
        "created_at",
    ]
    assert [c["name"] for c in inspector.get_columns("projects")] == [
        "project_id",
        "project_name",
        "project_description",
        "project_progress",
        "created_by",
        "created_at",
        "status",
    ]
    assert [c["name"] for c in inspector.get_columns("project_members")] == [
        "id",
        "project_id",
        "user_id",
        "role",
        "joined_at",
    ]


def test_store_defaults_apply(engine):
    with engine.begin() as conn:
        conn.execute(text("INSERT INTO users (username, email, password) VALUES ('a', 'a@b.com', 'x')"))
        conn.execute(text("INSERT INTO projects (project_name, created_by) VALUES ('Demo', 1)"))
        row = conn.execute(
            text("SELECT project_progress, status, created_at FROM projects WHERE project_id = 1")
        ).one()

    assert row.project_progress == 0
    assert row.status == "not started"
    assert row.created_at is not None


def test_status_check_accepts_canceled_and_rejects_unknown(engine):
    with engine.begin() as conn:
        conn.execute(text("INSERT INTO users (username, email, password) VALUES ('a', 'a@b.com', 'x')"))
        conn.execute(text("INSERT INTO projects (project_name, created_by, status) VALUES ('Demo', 1, 'canceled')"))

    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.execute(text("INSERT INTO projects (project_name, created_by, status) VALUES ('Bad', 1, 'archived')"))


def test_foreign_keys_are_enforced(engine):
    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.execute(text("INSERT INTO projects (project_name, created_by) VALUES ('Orphan', 42)"))


def test_membership_pair_is_unique(engine):
    with engine.begin() as conn:
        conn.execute(text("INSERT INTO users (username, email, password) VALUES ('a', 'a@b.com', 'x')"))
        conn.execute(text("INSERT INTO projects (project_name, created_by) VALUES ('Demo', 1)"))
        conn.execute(text("INSERT INTO project_members (project_id, user_id, role) VALUES (1, 1, 'Owner')"))

    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.execute(text("INSERT INTO project_members (project_id, user_id, role) VALUES (1, 1, 'Member')"))


def test_init_db_creates_file_database(tmp_path):
    db_path = tmp_path / "nested" / "projectmanager.db"
    file_engine = build_engine(f"sqlite:///{db_path}")
    try:
        init_db(file_engine)
        assert db_path.exists()
        assert "users" in inspect(file_engine).get_table_names()
    finally:
        file_engine.dispose()


def test_session_scope_closes_and_rolls_back(engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with pytest.raises(RuntimeError):
        with session_scope(factory) as db:
            db.execute(text("INSERT INTO users (username, email, password) VALUES ('a', 'a@b.com', 'x')"))
            raise RuntimeError("boom")

    with session_scope(factory) as db:
        assert db.execute(text("SELECT COUNT(*) FROM users")).scalar() == 0


def test_building_an_engine_does_not_touch_the_filesystem(tmp_path):
    db_path = tmp_path / "later" / "projectmanager.db"
    file_engine = build_engine(f"sqlite:///{db_path}")
    try:
        assert not db_path.parent.exists()
    finally:
        file_engine.dispose()
