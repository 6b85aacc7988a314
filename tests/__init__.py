"""Test package. Forces a hermetic configuration before app modules are imported."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["APP_ENV"] = "dev"
