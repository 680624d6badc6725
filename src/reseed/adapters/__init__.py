"""Adapters connecting the seeding engine to databases and fixture files."""
