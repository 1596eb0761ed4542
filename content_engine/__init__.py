"""Content engine keyword seeding package."""
