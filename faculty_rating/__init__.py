"""
Faculty Rating Backend Package.

FastAPI service layer for the university faculty-rating application.
Students register against a year/semester/section, rate the faculty
assigned to their section, and administrators review aggregated analytics.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, authentication, and dependencies
    - models: Pydantic schemas and enums
    - services: Registration, faculty, ratings, analytics and chart services
    - sql: Parameterized SQL queries against the hosted Postgres tables
"""

__version__ = "1.0.0"
