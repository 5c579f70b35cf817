"""Test helper utilities for the anagram counter tests."""

from .static_jobs import FailingJob, StaticJob, load_fixture_jobs

__all__ = ["FailingJob", "StaticJob", "load_fixture_jobs"]
