"""
Repository layer - data access abstraction.

Repositories handle all database queries, keeping SQL out of the route
layer, and return records shaped for the API.
"""
from jobly.repositories.base import BaseRepository
from jobly.repositories.company_repository import CompanyRepository, compile_company_filters
from jobly.repositories.job_repository import JobRepository, compile_job_filters
from jobly.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CompanyRepository",
    "JobRepository",
    "UserRepository",
    "compile_company_filters",
    "compile_job_filters",
]
