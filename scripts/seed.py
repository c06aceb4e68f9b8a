"""
Seed script - populates the database with sample data for development.

Run with `python -m scripts.seed`. Safe to re-run: only empty tables are filled.
"""
import asyncio
from decimal import Decimal

from sqlalchemy import func, select

from jobly.core.database import async_session_maker, init_db
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.models.user import User
from jobly.repositories import CompanyRepository, JobRepository, UserRepository

USERS = [
    {
        "username": "testuser",
        "password": "password",
        "firstName": "Test",
        "lastName": "User",
        "email": "joel@joelburton.com",
        "isAdmin": False,
    },
    {
        "username": "testadmin",
        "password": "password",
        "firstName": "Test",
        "lastName": "Admin!",
        "email": "joel@joelburton.com",
        "isAdmin": True,
    },
]

COMPANIES = [
    {
        "handle": "bauer-gallagher",
        "name": "Bauer-Gallagher",
        "numEmployees": 862,
        "description": "Difficult ready trip question produce produce someone.",
        "logoUrl": None,
    },
    {
        "handle": "edwards-lee-reese",
        "name": "Edwards, Lee and Reese",
        "numEmployees": 744,
        "description": "To much recent it reality coach decision Mr.",
        "logoUrl": "/logos/logo2.png",
    },
    {
        "handle": "hall-davis",
        "name": "Hall-Davis",
        "numEmployees": 749,
        "description": "Adult go economic off into. Suddenly happy according only.",
        "logoUrl": None,
    },
    {
        "handle": "watson-davis",
        "name": "Watson-Davis",
        "numEmployees": 819,
        "description": "Year join loss.",
        "logoUrl": "/logos/logo3.png",
    },
    {
        "handle": "sellers-bryant",
        "name": "Sellers-Bryant",
        "numEmployees": 0,
        "description": "Language ready while ask stay.",
        "logoUrl": None,
    },
]

JOBS = [
    {"title": "Conservator, furniture", "salary": 110000, "equity": Decimal("0"), "companyHandle": "watson-davis"},
    {"title": "Information officer", "salary": 200000, "equity": None, "companyHandle": "hall-davis"},
    {"title": "Consulting civil engineer", "salary": 60000, "equity": Decimal("0"), "companyHandle": "sellers-bryant"},
    {"title": "Early years teacher", "salary": 55000, "equity": Decimal("0.01"), "companyHandle": "bauer-gallagher"},
    {"title": "Intelligence analyst", "salary": 77000, "equity": Decimal("0"), "companyHandle": "edwards-lee-reese"},
    {"title": "Accounting technician", "salary": 52000, "equity": Decimal("0.06"), "companyHandle": "edwards-lee-reese"},
    {"title": "Surveyor, mining", "salary": None, "equity": Decimal("0.02"), "companyHandle": "hall-davis"},
]

async def _is_empty(db, model) -> bool:
    count = await db.scalar(select(func.count()).select_from(model))
    return not count

async def seed():
    """Create the tables, then fill each empty one; tables with rows are left alone."""
    await init_db()

    # Companies before jobs: jobs reference them
    plan = [
        (User, USERS, UserRepository().register),
        (Company, COMPANIES, CompanyRepository().create),
        (Job, JOBS, JobRepository().create),
    ]

    async with async_session_maker() as db:
        for model, rows, create in plan:
            table = model.__tablename__
            if not await _is_empty(db, model):
                print(f"  {table}: has rows, skipped")
                continue
            for row in rows:
                await create(db, row)
            print(f"  {table}: {len(rows)} rows")

        await db.commit()

    print("Seed complete.")

if __name__ == "__main__":
    asyncio.run(seed())
