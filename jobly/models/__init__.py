"""
Database models for Jobly.

Models define the schema; queries are issued as SQL through the repositories.
"""
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.models.user import User
from jobly.models.application import Application

__all__ = [
    "Company",
    "Job",
    "User",
    "Application",
]
