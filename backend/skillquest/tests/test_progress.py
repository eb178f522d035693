"""Tests for progress upserts, lesson completion and unlocking."""

import asyncio
import pathlib
import sys
from datetime import date, timedelta

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlmodel import SQLModel

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from skillquest.main import app
from skillquest.database import get_session
from skillquest.models import User, Module, Lesson
from skillquest.auth import create_access_token
from skillquest.crud import complete_lesson, get_user_achievements, get_lesson_progress


async def _setup_test_db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    TestSession = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_session():
        async with TestSession() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    return TestSession


async def _seed(TestSession, xp_reward: int = 100):
    async with TestSession() as session:
        user = User(email="learner@example.com", name="Learner")
        module = Module(title="Basics", description="Basics", order=1)
        session.add(user)
        session.add(module)
        await session.flush()
        first = Lesson(title="L1", module_id=module.id, order=1, xp_reward=xp_reward)
        second = Lesson(title="L2", module_id=module.id, order=2, xp_reward=xp_reward)
        session.add(first)
        session.add(second)
        await session.commit()
        return user.id, first.id, second.id


def test_progress_upsert_keeps_best_score():
    async def run():
        TestSession = await _setup_test_db()
        user_id, lesson_id, _ = await _seed(TestSession)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            payload = {"user_id": user_id, "lesson_id": lesson_id, "completed": True}
            resp = await client.post("/progress/", json={**payload, "score": 80})
            first_id = resp.json()["id"]
            resp = await client.post("/progress/", json={**payload, "score": 60})
            assert resp.json()["id"] == first_id

            resp = await client.get(f"/progress/users/{user_id}/lessons/{lesson_id}")
            row = resp.json()
            assert row["score"] == 80
            assert row["attempts"] == 2
            assert row["completed"] is True
            assert row["completed_at"] is not None

            resp = await client.get(f"/progress/users/{user_id}")
            assert len(resp.json()) == 1

    asyncio.run(run())


def test_incomplete_attempt_clears_completion():
    async def run():
        TestSession = await _setup_test_db()
        user_id, lesson_id, _ = await _seed(TestSession)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            base = {"user_id": user_id, "lesson_id": lesson_id}
            await client.post("/progress/", json={**base, "completed": True, "score": 90})
            await client.post("/progress/", json={**base, "completed": False, "score": 10})

            resp = await client.get(f"/progress/users/{user_id}/lessons/{lesson_id}")
            row = resp.json()
            assert row["completed"] is False
            assert row["completed_at"] is None
            assert row["score"] == 90
            assert row["attempts"] == 2

            resp = await client.get(f"/progress/users/{user_id}/lessons/999")
            assert resp.json() is None

    asyncio.run(run())


def test_complete_lesson_awards_xp_and_first_lesson():
    async def run():
        TestSession = await _setup_test_db()
        user_id, first_id, second_id = await _seed(TestSession, xp_reward=600)
        today = date(2024, 1, 1)
        async with TestSession() as session:
            user = await session.get(User, user_id)
            first = await session.get(Lesson, first_id)
            second = await session.get(Lesson, second_id)

            assert await complete_lesson(session, user, first, 70, today) == 600
            assert user.total_score == 600
            assert user.current_streak == 1

            # repeating the lesson keeps the best score and counts attempts
            await complete_lesson(session, user, first, 50, today)
            progress = await get_lesson_progress(session, user_id, first_id)
            assert progress.score == 70
            assert progress.attempts == 2
            assert user.current_streak == 1

            await complete_lesson(session, user, second, 90, today + timedelta(days=1))
            assert user.total_score == 1800
            assert user.level == 2
            assert user.current_streak == 2

            achievements = await get_user_achievements(session, user_id)
            assert [a.type for a in achievements] == ["first_lesson", "level_up"]

    asyncio.run(run())


def test_lesson_completion_endpoint_and_unlocking():
    async def run():
        TestSession = await _setup_test_db()
        user_id, first_id, second_id = await _seed(TestSession)
        token = create_access_token({"sub": "learner@example.com"})
        headers = {"Authorization": f"Bearer {token}"}
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get(f"/lessons/{second_id}/unlocked")
            assert resp.json() == {"unlocked": False}

            resp = await client.get(f"/lessons/{first_id}/unlocked", headers=headers)
            assert resp.json() == {"unlocked": True}
            resp = await client.get(f"/lessons/{second_id}/unlocked", headers=headers)
            assert resp.json() == {"unlocked": False}

            resp = await client.post(f"/lessons/{first_id}/complete", json={"score": 100})
            assert resp.status_code == 401

            resp = await client.post(
                f"/lessons/{first_id}/complete", json={"score": 100}, headers=headers
            )
            assert resp.status_code == 200
            assert resp.json() == {"success": True, "xp_earned": 100}

            resp = await client.get(f"/lessons/{second_id}/unlocked", headers=headers)
            assert resp.json() == {"unlocked": True}

            resp = await client.post(
                "/lessons/999/complete", json={"score": 100}, headers=headers
            )
            assert resp.status_code == 404

            resp = await client.get("/progress/me", headers=headers)
            summary = resp.json()
            assert summary["user"]["total_score"] == 100
            assert len(summary["completed_lessons"]) == 1
            assert [a["type"] for a in summary["achievements"]] == ["first_lesson"]

            resp = await client.get("/progress/me")
            assert resp.json() is None

    asyncio.run(run())
