# setup.py
from setuptools import find_packages, setup

setup(
    name="findmygym",
    version="0.1.0",
    packages=find_packages(include=["findmygym", "findmygym.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.29",
        "sqlalchemy[asyncio]>=2.0",
        "asyncpg>=0.29",
        "psycopg[binary]>=3.1",
        "alembic>=1.13",
        "pydantic[email]>=2.6",
        "pydantic-settings>=2.2",
        "python-dotenv>=1.0",
        "structlog>=24.1",
        "sentry-sdk>=2.0",
        "slowapi>=0.1.9",
        "limits>=3.9",
        "bcrypt>=4.1",
        "tzdata>=2024.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
            "aiosqlite>=0.20",
        ],
    },
)
