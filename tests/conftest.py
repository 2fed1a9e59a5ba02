"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

# No deadline: the lockstep model tests run many operations per example.
settings.register_profile("no_deadline", deadline=None)

# A heavier profile for exhaustive local runs: HYPOTHESIS_PROFILE=thorough.
settings.register_profile("thorough", deadline=None, max_examples=5_000)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "no_deadline"))
