"""
Local Library Catalog Package

A server-rendered library catalog: books, authors, genres and the physical
copies (book instances) of each book.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- rendering.py: Jinja2 templates and outcome-to-response mapping
- models/: SQLAlchemy ORM models
- schemas/: Form validation and sanitization
- services/: Persistence gateway, aggregation and request workflows
- routers/: HTML route handlers
- utils/: Helper functions
"""

__version__ = "0.1.0"
