"""Database package — declarative base and naming convention shared by models and migrations."""
