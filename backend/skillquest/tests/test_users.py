"""Tests for learner records, the leaderboard and XP / streak updates."""

import asyncio
import pathlib
import sys
from datetime import date, timedelta

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlmodel import SQLModel

# Allow importing the skillquest package
sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from skillquest.main import app
from skillquest.database import get_session
from skillquest.models import User, Progress, QuizAttempt, Achievement, LearningPrompt, PromptAttempt
from skillquest.auth import create_access_token
from skillquest.crud import record_daily_activity, get_user_achievements


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


def test_create_user_is_idempotent_by_email():
    async def run():
        await _setup_test_db()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post(
                "/users/", json={"email": "ada@example.com", "name": "Ada"}
            )
            assert resp.status_code == 200
            user_id = resp.json()["id"]

            resp = await client.post(
                "/users/", json={"email": "ada@example.com", "name": "Someone"}
            )
            assert resp.json()["id"] == user_id

            resp = await client.get("/users/by-email", params={"email": "ada@example.com"})
            body = resp.json()
            assert body["name"] == "Ada"
            assert body["total_score"] == 0
            assert body["level"] == 1
            assert body["current_streak"] == 0

            resp = await client.get(f"/users/{user_id}")
            assert resp.json()["email"] == "ada@example.com"

            resp = await client.get("/users/9999")
            assert resp.status_code == 200
            assert resp.json() is None

            resp = await client.get("/users/by-email", params={"email": "nobody@example.com"})
            assert resp.json() is None

    asyncio.run(run())


def test_current_user_requires_token():
    async def run():
        await _setup_test_db()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/users/me")
            assert resp.status_code == 401

            resp = await client.get(
                "/users/me", headers={"Authorization": "Bearer not-a-jwt"}
            )
            assert resp.status_code == 401

            await client.post("/users/", json={"email": "me@example.com", "name": "Me"})
            token = create_access_token({"sub": "me@example.com"})
            resp = await client.get(
                "/users/me", headers={"Authorization": f"Bearer {token}"}
            )
            assert resp.status_code == 200
            assert resp.json()["name"] == "Me"

    asyncio.run(run())


def test_leaderboard_top_ten_by_score():
    async def run():
        TestSession = await _setup_test_db()
        async with TestSession() as session:
            for i in range(12):
                session.add(
                    User(email=f"u{i}@example.com", name=f"U{i}", total_score=(i * 37) % 12 * 100)
                )
            await session.commit()

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/users/leaderboard")
            assert resp.status_code == 200
            entries = resp.json()
            assert [e["rank"] for e in entries] == list(range(1, 11))
            assert all("email" not in e for e in entries)
            assert set(entries[0]) == {
                "rank",
                "name",
                "total_score",
                "level",
                "current_streak",
            }
            scores = [e["total_score"] for e in entries]
            assert len(scores) == 10
            assert scores == sorted(scores, reverse=True)
            assert scores[0] == 1100

    asyncio.run(run())


def test_update_user_progress_keeps_level_in_step():
    async def run():
        TestSession = await _setup_test_db()
        async with TestSession() as session:
            user = User(
                email="lvl@example.com",
                name="Lvl",
                total_score=950,
                current_streak=4,
                longest_streak=4,
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            user_id = user.id

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post(
                f"/users/{user_id}/progress", json={"xp_gained": 100}
            )
            assert resp.status_code == 200
            body = resp.json()
            assert body["total_score"] == 1050
            assert body["level"] == 2
            assert body["current_streak"] == 4

            resp = await client.post(
                f"/users/{user_id}/progress",
                json={"xp_gained": 2000, "streak_update": True},
            )
            body = resp.json()
            assert body["total_score"] == 3050
            assert body["level"] == 4
            assert body["current_streak"] == 5
            assert body["longest_streak"] == 5
            assert body["last_active_date"] == date.today().isoformat()

            resp = await client.post("/users/999/progress", json={"xp_gained": 1})
            assert resp.status_code == 404

    asyncio.run(run())


def test_score_update_emits_level_up():
    async def run():
        TestSession = await _setup_test_db()
        async with TestSession() as session:
            user = User(email="up@example.com", name="Up", total_score=900)
            session.add(user)
            await session.commit()
            await session.refresh(user)
            user_id = user.id

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post(f"/users/{user_id}/score", json={"score_to_add": 50})
            assert resp.json() == {"new_level": 1, "new_total_score": 950}

            resp = await client.post(f"/users/{user_id}/score", json={"score_to_add": 100})
            assert resp.json() == {"new_level": 2, "new_total_score": 1050}

            resp = await client.get(f"/users/{user_id}/achievements")
            achievements = resp.json()
            assert [a["type"] for a in achievements] == ["level_up"]
            assert achievements[0]["metadata"]["level"] == 2
            assert achievements[0]["title"] == "Level 2 Reached!"

            resp = await client.post("/users/404/score", json={"score_to_add": 1})
            assert resp.status_code == 404

    asyncio.run(run())


def test_daily_activity_resets_after_gap():
    async def run():
        TestSession = await _setup_test_db()
        today = date(2024, 3, 10)
        async with TestSession() as session:
            user = User(
                email="streak@example.com",
                name="Streak",
                current_streak=2,
                longest_streak=6,
                last_active_date=(today - timedelta(days=1)).isoformat(),
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)

            assert await record_daily_activity(session, user, today) == 3
            # second call on the same day changes nothing
            assert await record_daily_activity(session, user, today) == 3
            achievements = await get_user_achievements(session, user.id)
            assert [a.type for a in achievements] == ["streak_3"]
            assert achievements[0].meta == {"streak": 3}

            later = today + timedelta(days=5)
            assert await record_daily_activity(session, user, later) == 1
            assert user.longest_streak == 6
            assert user.last_active_date == later.isoformat()

    asyncio.run(run())


def test_sample_users_are_seeded_once():
    async def run():
        await _setup_test_db()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/users/sample")
            assert resp.status_code == 200
            alex = resp.json()
            assert alex["email"] == "alex@example.com"
            assert alex["level"] == 3

            resp = await client.post("/users/samples")
            assert resp.json() == {
                "message": "Sample users already exist",
                "sample_user_id": alex["id"],
            }

            resp = await client.get("/users/leaderboard")
            assert [u["name"] for u in resp.json()] == [
                "Alex Chen",
                "Sarah Kim",
                "Mike Johnson",
            ]

    asyncio.run(run())


def test_timestamps_are_timezone_aware():
    columns = [
        User.__table__.c.created_at,
        Progress.__table__.c.completed_at,
        QuizAttempt.__table__.c.completed_at,
        Achievement.__table__.c.earned_at,
        LearningPrompt.__table__.c.created_at,
        PromptAttempt.__table__.c.completed_at,
    ]
    assert all(column.type.timezone for column in columns)

    user = User(email="tz@example.com", name="Tz")
    assert user.created_at.tzinfo is not None

    async def run():
        TestSession = await _setup_test_db()
        async with TestSession() as session:
            session.add(user)
            await session.commit()
            await session.refresh(user)
            assert user.id is not None

    asyncio.run(run())
