"""Shared dependencies for API routes."""

from services.scoring.registry import get_engine


def get_matching_engine():
    return get_engine("matching")


def get_bot_detection():
    return get_engine("bot_detection")


def get_job_verification():
    return get_engine("job_verification")
