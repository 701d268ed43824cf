"""Shared pytest setup: keep opik @track spans local during tests."""

import os

os.environ.setdefault("OPIK_TRACK_DISABLE", "true")
