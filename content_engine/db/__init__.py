"""Database package: declarative base, session factory and seeding commands."""
