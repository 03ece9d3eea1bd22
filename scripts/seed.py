# scripts/seed.py
"""
Load the Bangalore demo data set: gyms with hours, amenities, plans, photos,
classes and reviews, demo users, running deals, and the project task list.
Gyms are matched by slug and users by email, so re-running without --reset
only fills in what is missing.
"""

import argparse
import asyncio
import logging
import os
import random
import sys
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import TypedDict

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Run from the repo root
sys.path.append(os.path.abspath("."))

from findmygym import db
from findmygym.core.config import get_settings
from findmygym.models import (
    Booking,
    Deal,
    Favorite,
    Gym,
    GymAmenity,
    GymClass,
    GymHour,
    GymPhoto,
    Membership,
    ProjectTask,
    RecentView,
    Review,
    ReviewHelpful,
    ReviewReport,
    User,
)
from findmygym.services.users import BCRYPT_ROUNDS, hash_password
from findmygym.utils.datetime import utcnow
from scripts.tasks.store import load_tracker

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"


class GymSeed(TypedDict):
    name: str
    slug: str
    description: str
    address: str
    lat: float
    lng: float
    phone: str
    website: str | None
    price_range: str
    type: str
    image_url: str


def _img(photo_id: str) -> str:
    return f"https://images.unsplash.com/photo-{photo_id}?w=800"


# fmt: off
GYMS: list[GymSeed] = [
    {"name": "Iron Paradise Fitness", "slug": "iron-paradise-fitness", "description": "Premium bodybuilding and strength training facility with state-of-the-art equipment.", "address": "123 MG Road, Bangalore", "lat": 12.9716, "lng": 77.5946, "phone": "+91-9876543210", "website": "https://ironparadise.com", "price_range": "premium", "type": "commercial", "image_url": _img("1534438327276-14e5300c3a48")},
    {"name": "FlexZone CrossFit", "slug": "flexzone-crossfit", "description": "High-intensity CrossFit training with certified coaches and community vibes.", "address": "45 Koramangala 4th Block, Bangalore", "lat": 12.9352, "lng": 77.6245, "phone": "+91-9876543211", "website": "https://flexzonecf.com", "price_range": "premium", "type": "crossfit", "image_url": _img("1571902943202-507ec2618e8f")},
    {"name": "Zen Yoga Studio", "slug": "zen-yoga-studio", "description": "Peaceful yoga studio offering Hatha, Vinyasa, and Meditation classes.", "address": "78 Indiranagar, Bangalore", "lat": 12.9784, "lng": 77.6408, "phone": "+91-9876543212", "website": "https://zenyoga.in", "price_range": "mid", "type": "yoga", "image_url": _img("1545205597-3d9d02c29597")},
    {"name": "FitBudget Gym", "slug": "fitbudget-gym", "description": "Affordable gym with all essential equipment. Great value for money.", "address": "12 BTM Layout, Bangalore", "lat": 12.9166, "lng": 77.6101, "phone": "+91-9876543213", "website": None, "price_range": "budget", "type": "budget", "image_url": _img("1558611848-73f7eb4001a1")},
    {"name": "She Fitness - Women Only", "slug": "she-fitness-women-only", "description": "Exclusive women-only gym with personal trainers, group classes, and a safe space.", "address": "56 HSR Layout, Bangalore", "lat": 12.9121, "lng": 77.6446, "phone": "+91-9876543214", "website": "https://shefitness.in", "price_range": "mid", "type": "women_only", "image_url": _img("1518611012118-696072aa579a")},
    {"name": "24/7 Fitness Hub", "slug": "247-fitness-hub", "description": "Round-the-clock gym access with smart card entry and CCTV monitoring.", "address": "89 Whitefield, Bangalore", "lat": 12.9698, "lng": 77.7500, "phone": "+91-9876543215", "website": "https://247fitnesshub.com", "price_range": "mid", "type": "24x7", "image_url": _img("1540497077202-7c8a3999166f")},
    {"name": "PowerLift Arena", "slug": "powerlift-arena", "description": "Dedicated powerlifting and Olympic weightlifting facility.", "address": "34 JP Nagar, Bangalore", "lat": 12.9063, "lng": 77.5857, "phone": "+91-9876543216", "website": "https://powerliftarena.com", "price_range": "premium", "type": "commercial", "image_url": _img("1526506118085-60ce8714f8c5")},
    {"name": "AquaFit Swimming & Gym", "slug": "aquafit-swimming-gym", "description": "Swimming pool with gym facilities, aqua aerobics, and personal training.", "address": "67 Jayanagar, Bangalore", "lat": 12.9308, "lng": 77.5838, "phone": "+91-9876543217", "website": "https://aquafit.in", "price_range": "premium", "type": "commercial", "image_url": _img("1576013551627-0cc20b96c2a7")},
    {"name": "Urban Fitness Co.", "slug": "urban-fitness-co", "description": "Modern fitness center with functional training, cardio zone, and smoothie bar.", "address": "101 Electronic City, Bangalore", "lat": 12.8456, "lng": 77.6603, "phone": "+91-9876543218", "website": "https://urbanfitnessco.com", "price_range": "mid", "type": "commercial", "image_url": _img("1593079831268-3381b0db4a77")},
    {"name": "MuscleFactory", "slug": "musclefactory", "description": "Old-school bodybuilding gym with heavy iron, no frills, just results.", "address": "22 Marathahalli, Bangalore", "lat": 12.9591, "lng": 77.6974, "phone": "+91-9876543219", "website": None, "price_range": "budget", "type": "commercial", "image_url": _img("1583454110551-21f2fa2afe61")},
    {"name": "Mindful Movement Studio", "slug": "mindful-movement-studio", "description": "Pilates, barre, and mindfulness-focused movement classes.", "address": "88 Lavelle Road, Bangalore", "lat": 12.9716, "lng": 77.5993, "phone": "+91-9876543220", "website": "https://mindfulmovement.in", "price_range": "premium", "type": "yoga", "image_url": _img("1518609878373-06d740f60d8b")},
    {"name": "CrossFit Inferno", "slug": "crossfit-inferno", "description": "Intense CrossFit box with competition-level programming and community WODs.", "address": "15 Sarjapur Road, Bangalore", "lat": 12.9107, "lng": 77.6871, "phone": "+91-9876543221", "website": "https://cfinferno.com", "price_range": "premium", "type": "crossfit", "image_url": _img("1526401485004-46910ecc8e51")},
    {"name": "FitFirst Gym", "slug": "fitfirst-gym", "description": "Community gym with friendly staff, clean facilities, and affordable plans.", "address": "44 Yelahanka, Bangalore", "lat": 13.1005, "lng": 77.5963, "phone": "+91-9876543222", "website": None, "price_range": "budget", "type": "budget", "image_url": _img("1570829460005-c840387bb1ca")},
    {"name": "Strength & Soul", "slug": "strength-and-soul", "description": "Holistic fitness combining strength training with yoga and meditation.", "address": "72 Rajajinagar, Bangalore", "lat": 12.9883, "lng": 77.5533, "phone": "+91-9876543223", "website": "https://strengthandsoul.com", "price_range": "mid", "type": "commercial", "image_url": _img("1574680096145-d05b474e2155")},
    {"name": "Rapid Fitness 24x7", "slug": "rapid-fitness-247", "description": "Automated 24/7 gym with app-based access, modern machines, and smart tracking.", "address": "99 Hebbal, Bangalore", "lat": 13.0358, "lng": 77.5970, "phone": "+91-9876543224", "website": "https://rapidfitness.in", "price_range": "mid", "type": "24x7", "image_url": _img("1534367507873-d2d7e24c797f")},
    {"name": "Peak Performance Center", "slug": "peak-performance-center", "description": "Sports performance training center with athletics coaching and rehab services.", "address": "31 Malleshwaram, Bangalore", "lat": 13.0035, "lng": 77.5647, "phone": "+91-9876543225", "website": "https://peakperformance.in", "price_range": "premium", "type": "commercial", "image_url": _img("1576678927484-cc907957088c")},
    {"name": "Curves Fitness - Ladies", "slug": "curves-fitness-ladies", "description": "Women-focused circuit training gym with supportive coaches.", "address": "53 Banashankari, Bangalore", "lat": 12.9255, "lng": 77.5468, "phone": "+91-9876543226", "website": "https://curvesfitness.in", "price_range": "mid", "type": "women_only", "image_url": _img("1571019614242-c5c5dee9f50b")},
    {"name": "GymBro Arena", "slug": "gymbro-arena", "description": "Massive training floor with every machine imaginable. Bro splits welcome.", "address": "66 Bellandur, Bangalore", "lat": 12.9260, "lng": 77.6762, "phone": "+91-9876543227", "website": "https://gymbroarena.com", "price_range": "mid", "type": "commercial", "image_url": _img("1605296867424-35fc25c9212a")},
    {"name": "Sunrise Yoga Shala", "slug": "sunrise-yoga-shala", "description": "Traditional Ashtanga and Mysore-style yoga in a serene setting.", "address": "11 Sadashivanagar, Bangalore", "lat": 13.0067, "lng": 77.5800, "phone": "+91-9876543228", "website": "https://sunriseyoga.in", "price_range": "budget", "type": "yoga", "image_url": _img("1506126613408-eca07ce68773")},
    {"name": "Titan Strength Gym", "slug": "titan-strength-gym", "description": "Serious strength training facility with platforms, racks, and competition gear.", "address": "40 Vijayanagar, Bangalore", "lat": 12.9719, "lng": 77.5350, "phone": "+91-9876543229", "website": "https://titanstrength.com", "price_range": "mid", "type": "commercial", "image_url": _img("1581009146145-b5ef050c2e1e")},
]
# fmt: on

AMENITIES_POOL: list[tuple[str, str]] = [
    ("Swimming Pool", "waves"),
    ("Sauna", "thermometer"),
    ("Steam Room", "cloud"),
    ("Parking", "car"),
    ("Wi-Fi", "wifi"),
    ("Locker Room", "lock"),
    ("Showers", "shower-head"),
    ("Air Conditioning", "air-vent"),
    ("Personal Trainer", "user-check"),
    ("Group Classes", "users"),
    ("Cardio Zone", "heart-pulse"),
    ("Free Weights", "dumbbell"),
    ("Functional Training", "zap"),
    ("Smoothie Bar", "cup-soda"),
    ("Towel Service", "shirt"),
    ("Body Composition Analysis", "scan"),
    ("Physiotherapy", "stethoscope"),
    ("Kids Play Area", "baby"),
]

# (class name, category, minutes)
CLASS_TYPES: list[tuple[str, str, int]] = [
    ("Yoga Flow", "yoga", 60),
    ("HIIT Blast", "cardio", 45),
    ("Zumba", "dance", 60),
    ("Spin Class", "cardio", 45),
    ("Boxing Fit", "martial_arts", 60),
    ("Pilates Core", "yoga", 50),
    ("Body Pump", "strength", 55),
    ("Kickboxing", "martial_arts", 60),
    ("Power Yoga", "yoga", 60),
    ("Aqua Aerobics", "cardio", 45),
]

INSTRUCTORS = [
    "Priya Sharma",
    "Rahul Verma",
    "Anita Singh",
    "Vikram Patel",
    "Deepa Nair",
    "Arjun Kumar",
    "Meera Reddy",
    "Karthik Iyer",
    "Sneha Gupta",
    "Rohan Das",
]

REVIEW_TEXTS = [
    "Excellent gym with great equipment and friendly staff. Highly recommended!",
    "Good value for money. The trainers are knowledgeable and helpful.",
    "Clean facilities and well-maintained equipment. Love the vibe here.",
    "Best gym in the area. The group classes are amazing!",
    "Decent gym but can get crowded during peak hours.",
    "Great variety of equipment. Could improve the ventilation though.",
    "Friendly atmosphere, perfect for beginners. Staff is very supportive.",
    "Top-notch facilities. The swimming pool is a big plus.",
    "Affordable and well-equipped. My go-to gym for the past year.",
    "Amazing CrossFit box! The community here keeps you motivated.",
    "Nice yoga studio with experienced instructors. Very calming environment.",
    "Good gym overall. Parking can be an issue sometimes.",
    "Love the 24/7 access. Perfect for my irregular schedule.",
    "The personal trainers here really know their stuff. Great results!",
    "Solid gym with everything you need. No complaints!",
    "Wonderful experience! The ambiance is perfect for workouts.",
    "Could be better. Equipment is a bit dated but functional.",
    "Premium gym with premium service. Worth every penny.",
    "Great for powerlifting. Has all the specialty equipment you need.",
    "Excellent women-only gym. Feels very safe and comfortable.",
]

SAMPLE_USERS = [
    {"name": "Aarav Patel", "email": "aarav@example.com", "fitness_goals": ["muscle_gain", "strength"], "preferred_workouts": ["weightlifting", "crossfit"], "budget_range": "high"},  # noqa: E501
    {"name": "Ishita Sharma", "email": "ishita@example.com", "fitness_goals": ["weight_loss", "flexibility"], "preferred_workouts": ["yoga", "cardio"], "budget_range": "medium"},  # noqa: E501
    {"name": "Rohan Gupta", "email": "rohan@example.com", "fitness_goals": ["general_fitness"], "preferred_workouts": ["mixed"], "budget_range": "low"},  # noqa: E501
    {"name": "Sneha Kumar", "email": "sneha@example.com", "fitness_goals": ["toning", "endurance"], "preferred_workouts": ["hiit", "dance"], "budget_range": "medium"},  # noqa: E501
    {"name": "Vikram Singh", "email": "vikram@example.com", "fitness_goals": ["powerlifting"], "preferred_workouts": ["powerlifting", "strongman"], "budget_range": "high"},  # noqa: E501
    {"name": "Priya Nair", "email": "priya@example.com", "fitness_goals": ["weight_loss", "mental_health"], "preferred_workouts": ["yoga", "pilates"], "budget_range": "medium"},  # noqa: E501
    {"name": "Arjun Reddy", "email": "arjun@example.com", "fitness_goals": ["muscle_gain"], "preferred_workouts": ["bodybuilding"], "budget_range": "low"},  # noqa: E501
    {"name": "Meera Das", "email": "meera@example.com", "fitness_goals": ["general_fitness", "social"], "preferred_workouts": ["group_classes", "zumba"], "budget_range": "medium"},  # noqa: E501
]

PRICE_MULTIPLIER = {"budget": 0.5, "mid": 1.0, "premium": 2.0}

# (plan, base price, months, features, popular)
PLANS: list[tuple[str, int, int, list[str], bool]] = [
    ("Day Pass", 200, 0, ["gym_access"], False),
    ("Monthly", 1500, 1, ["gym_access", "locker"], False),
    ("Quarterly", 4000, 3, ["gym_access", "locker", "group_classes"], True),
    ("Annual", 12000, 12, ["gym_access", "locker", "group_classes", "personal_trainer_1_session"], False),  # noqa: E501
]

STOCK_PHOTOS = [
    _img("1534438327276-14e5300c3a48"),
    _img("1571902943202-507ec2618e8f"),
    _img("1540497077202-7c8a3999166f"),
    _img("1593079831268-3381b0db4a77"),
]

# Child tables first
_RESET_ORDER = (
    ReviewReport,
    ReviewHelpful,
    RecentView,
    Deal,
    Booking,
    Favorite,
    Review,
    GymClass,
    Membership,
    GymPhoto,
    GymAmenity,
    GymHour,
    Gym,
    User,
    ProjectTask,
)


@dataclass
class SeedSummary:
    counts: dict[str, int] = field(default_factory=dict)
    gyms_created: int = 0
    users_created: int = 0
    tasks_loaded: int = 0


async def reset_all(sess: AsyncSession) -> None:
    for model in _RESET_ORDER:
        await sess.execute(delete(model))
    await sess.flush()


async def get_or_create_user(sess: AsyncSession, data: dict, password_hash: str) -> tuple[User, bool]:
    existing = (await sess.scalars(select(User).where(User.email == data["email"]))).first()
    if existing:
        return existing, False
    user = User(password_hash=password_hash, **data)
    sess.add(user)
    await sess.flush()
    return user, True


def _class_slot(rng: random.Random, minutes: int) -> tuple[int, str, str]:
    day = rng.randint(1, 6)
    start_hour = rng.randint(6, 18)
    end = start_hour * 60 + minutes
    return day, f"{start_hour:02d}:00", f"{end // 60:02d}:{end % 60:02d}"


def _populate_gym(gym: Gym, data: GymSeed, rng: random.Random) -> None:
    for day in range(7):
        sunday = day == 0
        gym.hours.append(
            GymHour(
                day_of_week=day,
                open_time="08:00" if sunday else "06:00",
                close_time="18:00" if sunday else "22:00",
                is_closed=False,
            )
        )

    n_amenities = rng.randint(4, 6) if data["type"] == "budget" else rng.randint(6, 12)
    for name, icon in rng.sample(AMENITIES_POOL, n_amenities):
        gym.amenities.append(GymAmenity(amenity_name=name, icon=icon))

    mult = PRICE_MULTIPLIER.get(data["price_range"], 1.0)
    for plan, base, months, features, popular in PLANS:
        gym.memberships.append(
            Membership(
                plan_name=plan,
                price=float(round(base * mult)),
                duration_months=months,
                features=list(features),
                is_popular=popular,
            )
        )

    gym.photos.append(GymPhoto(url=data["image_url"], caption="Main entrance", is_primary=True, order=0))
    for i in range(rng.randint(2, 4)):
        gym.photos.append(
            GymPhoto(url=rng.choice(STOCK_PHOTOS), caption=f"Photo {i + 1}", is_primary=False, order=i + 1)
        )

    if data["type"] != "budget":
        for name, category, minutes in rng.sample(CLASS_TYPES, rng.randint(3, 6)):
            day, start, end = _class_slot(rng, minutes)
            gym.classes.append(
                GymClass(
                    class_name=name,
                    instructor=rng.choice(INSTRUCTORS),
                    day_of_week=day,
                    start_time=start,
                    end_time=end,
                    capacity=rng.randint(10, 30),
                    category=category,
                )
            )


def _rand_score(rng: random.Random, low: float, high: float) -> float:
    return round(rng.uniform(low, high), 1)


async def get_or_create_gym(
    sess: AsyncSession, data: GymSeed, users: list[User], rng: random.Random
) -> tuple[Gym, bool]:
    existing = (await sess.scalars(select(Gym).where(Gym.slug == data["slug"]))).first()
    if existing:
        return existing, False

    gym = Gym(**data, is_active=True, hours=[], amenities=[], photos=[], memberships=[], classes=[])
    _populate_gym(gym, data, rng)
    sess.add(gym)
    await sess.flush()

    n_reviews = min(rng.randint(3, 7), len(users))
    for user in rng.sample(users, n_reviews):
        sess.add(
            Review(
                gym_id=gym.id,
                user_id=user.id,
                rating=_rand_score(rng, 2.5, 5.0),
                cleanliness=_rand_score(rng, 2.0, 5.0),
                equipment=_rand_score(rng, 2.0, 5.0),
                staff=_rand_score(rng, 2.0, 5.0),
                value_for_money=_rand_score(rng, 2.0, 5.0),
                text=rng.choice(REVIEW_TEXTS),
                helpful_count=rng.randint(0, 15),
                is_verified=rng.random() > 0.5,
            )
        )
    await sess.flush()
    return gym, True


async def seed_deals(sess: AsyncSession, gyms: list[Gym], rng: random.Random) -> int:
    if await sess.scalar(select(func.count()).select_from(Deal)):
        return 0
    now = utcnow()
    premium = [g for g in gyms if g.price_range == "premium"]
    created = 0
    for gym in rng.sample(premium, min(4, len(premium))):
        discount = float(rng.choice([10, 15, 20, 25, 30]))
        sess.add(
            Deal(
                gym_id=gym.id,
                title=f"{int(discount)}% off first month",
                description=f"New members at {gym.name} save {int(discount)}% on the Monthly plan.",
                discount=discount,
                valid_from=now - timedelta(days=7),
                valid_until=now + timedelta(days=30),
                is_active=True,
            )
        )
        created += 1
    await sess.flush()
    return created


def iter_tracker_subtasks(doc: dict):
    for phase in doc.get("phases", []):
        for task in phase.get("tasks", []):
            for sub in task.get("subtasks", []):
                yield phase, task, sub


async def seed_project_tasks(sess: AsyncSession, tasks_file: Path) -> int:
    if not tasks_file.exists():
        logger.warning("Task tracker %s not found; skipping project tasks.", tasks_file)
        return 0
    count = 0
    for phase, task, sub in iter_tracker_subtasks(load_tracker(tasks_file)):
        test = sub.get("test") or {}
        await sess.merge(
            ProjectTask(
                id=sub["id"],
                phase_id=phase["id"],
                task_id=task["id"],
                name=sub.get("name", ""),
                status=sub.get("status") or "pending",
                test_type=test.get("type", "unknown"),
                test_spec=test,
            )
        )
        count += 1
    await sess.flush()
    return count


async def _count(sess: AsyncSession, model) -> int:
    return int(await sess.scalar(select(func.count()).select_from(model)) or 0)


async def seed_all(
    sess: AsyncSession,
    *,
    rng: random.Random,
    tasks_file: Path | None = None,
    reset: bool = False,
    password_rounds: int = BCRYPT_ROUNDS,
) -> SeedSummary:
    summary = SeedSummary()
    if reset:
        await reset_all(sess)

    password_hash = hash_password(DEMO_PASSWORD, password_rounds)
    users: list[User] = []
    for data in SAMPLE_USERS:
        user, created = await get_or_create_user(sess, data, password_hash)
        users.append(user)
        summary.users_created += int(created)

    gyms: list[Gym] = []
    for data in GYMS:
        gym, created = await get_or_create_gym(sess, data, users, rng)
        gyms.append(gym)
        summary.gyms_created += int(created)

    await seed_deals(sess, gyms, rng)
    if tasks_file is not None:
        summary.tasks_loaded = await seed_project_tasks(sess, tasks_file)

    for label, model in (
        ("users", User),
        ("gyms", Gym),
        ("hours", GymHour),
        ("amenities", GymAmenity),
        ("memberships", Membership),
        ("photos", GymPhoto),
        ("reviews", Review),
        ("classes", GymClass),
        ("deals", Deal),
        ("tasks", ProjectTask),
    ):
        summary.counts[label] = await _count(sess, model)
    return summary


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo gyms, users, deals and project tasks.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete every existing row before seeding.",
    )
    parser.add_argument(
        "--tasks-file",
        type=Path,
        default=None,
        help="Task tracker JSON to load into project_tasks (default: MYGYM_TASKS_FILE).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for amenities, reviews and classes.",
    )
    return parser.parse_args(argv)


async def async_main(args: argparse.Namespace) -> int:
    tasks_file = args.tasks_file or Path(get_settings().mygym_tasks_file)
    async with db.SessionLocal() as sess:
        summary = await seed_all(
            sess, rng=random.Random(args.seed), tasks_file=tasks_file, reset=args.reset
        )
        await sess.commit()

    print("Seed completed.")
    for label, count in summary.counts.items():
        print(f"  {label.capitalize():<12} {count:>5}")
    print(f"  (new gyms: {summary.gyms_created}, new users: {summary.users_created})")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if args.reset and get_settings().app_env.lower() == "prod":
        logger.error("--reset is disabled when APP_ENV=prod.")
        return 1

    try:
        return asyncio.run(async_main(args))
    except Exception:  # noqa: BLE001
        logger.exception("Seed failed due to an unexpected error.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
