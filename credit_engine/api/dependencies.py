"""Dependency injection for FastAPI endpoints"""

import random
from datetime import date

from fastapi import Request

from credit_engine.config import settings


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_rng() -> random.Random:
    """Random source for bureau simulation; seeded when configured"""
    return random.Random(settings.bureau_simulator_seed)


def get_today() -> date:
    """Reference date for ages, lookbacks and deadlines"""
    return date.today()
