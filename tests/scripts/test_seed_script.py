from __future__ import annotations

import random
from pathlib import Path

import pytest
from sqlalchemy import func, select

from findmygym import db
from findmygym.models import Gym, GymClass, Membership, ProjectTask, Review, User
from findmygym.services.users import verify_password
from scripts.seed import DEMO_PASSWORD, GYMS, SAMPLE_USERS, parse_args, seed_all

TRACKER = Path(__file__).resolve().parents[2] / "mygym.json"


async def _count(session, model) -> int:
    return int(await session.scalar(select(func.count()).select_from(model)))


@pytest.mark.asyncio
async def test_seed_counts(seeded, session):
    assert seeded.gyms_created == len(GYMS) == 20
    assert seeded.users_created == len(SAMPLE_USERS) == 8
    assert seeded.counts["gyms"] == 20
    assert seeded.counts["hours"] == 20 * 7
    assert seeded.counts["memberships"] == 20 * 4
    assert 20 * 3 <= seeded.counts["reviews"] <= 20 * 7
    assert seeded.counts["deals"] > 0

    budget_classes = await session.scalar(
        select(func.count())
        .select_from(GymClass)
        .join(Gym, Gym.id == GymClass.gym_id)
        .where(Gym.type == "budget")
    )
    assert budget_classes == 0


@pytest.mark.asyncio
async def test_seed_prices_scale_with_range(seeded, session):
    rows = (
        await session.execute(
            select(Gym.price_range, Membership.price)
            .join(Membership, Membership.gym_id == Gym.id)
            .where(Membership.plan_name == "Monthly")
        )
    ).all()
    by_range = {pr: price for pr, price in rows}
    assert by_range == {"budget": 750.0, "mid": 1500.0, "premium": 3000.0}


@pytest.mark.asyncio
async def test_seed_ratings_in_range(seeded, session):
    ratings = (await session.scalars(select(Review.rating))).all()
    assert all(2.5 <= r <= 5.0 for r in ratings)
    assert all(r == round(r, 1) for r in ratings)


@pytest.mark.asyncio
async def test_seed_users_can_sign_in(seeded, session):
    user = (await session.scalars(select(User).where(User.email == "aarav@example.com"))).one()
    assert verify_password(DEMO_PASSWORD, user.password_hash)
    assert user.fitness_goals == ["muscle_gain", "strength"]


@pytest.mark.asyncio
async def test_seed_is_idempotent_without_reset(seeded, session):
    async with db.SessionLocal() as sess:
        again = await seed_all(sess, rng=random.Random(7), password_rounds=4)
        await sess.commit()
    assert again.gyms_created == 0
    assert again.users_created == 0
    assert await _count(session, Gym) == 20
    assert again.counts["reviews"] == seeded.counts["reviews"]


@pytest.mark.asyncio
async def test_seed_reset_rebuilds(seeded, session):
    async with db.SessionLocal() as sess:
        again = await seed_all(sess, rng=random.Random(11), reset=True, password_rounds=4)
        await sess.commit()
    assert again.gyms_created == 20
    assert await _count(session, User) == 8


@pytest.mark.asyncio
async def test_seed_loads_project_tasks(engine, session):
    async with db.SessionLocal() as sess:
        summary = await seed_all(
            sess, rng=random.Random(1), tasks_file=TRACKER, password_rounds=4
        )
        await sess.commit()
    assert summary.tasks_loaded == 10
    task = await session.get(ProjectTask, "P2-T1-S2")
    assert task.phase_id == "P2"
    assert task.task_id == "P2-T1"
    assert task.test_type == "unit"
    assert task.test_spec["file"] == "tests/services/test_aggregates.py"


@pytest.mark.asyncio
async def test_seed_missing_tracker_is_skipped(engine, tmp_path):
    async with db.SessionLocal() as sess:
        summary = await seed_all(
            sess, rng=random.Random(1), tasks_file=tmp_path / "none.json", password_rounds=4
        )
    assert summary.tasks_loaded == 0


def test_parse_args_defaults():
    args = parse_args([])
    assert args.reset is False
    assert args.tasks_file is None
    assert args.seed == 42
