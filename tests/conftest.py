"""
Pytest configuration and fixtures for the lead capture backend.
"""

import importlib.util
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from prolead.cache import TTLCache, shared_cache  # noqa: E402


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    """A fresh cache isolated from every other test."""
    return TTLCache(clock=clock)


@pytest.fixture(autouse=True)
def reset_shared_cache():
    shared_cache.clear()
    yield
    shared_cache.clear()


@pytest.fixture
def load_handler():
    """Import lambdas/<name>/handler.py as a standalone module."""

    def _load(name: str):
        path = os.path.join(ROOT, "lambdas", name, "handler.py")
        spec = importlib.util.spec_from_file_location(f"lambdas_{name}_handler", path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    return _load


@pytest.fixture
def sample_place() -> dict:
    return {
        "place_id": "ChIJ-cafe-1",
        "name": "Cafe Central",
        "formatted_address": "Av. Paulista, 1000 - São Paulo",
        "geometry": {"location": {"lat": -23.5614, "lng": -46.6559}},
        "types": ["cafe", "food", "point_of_interest", "establishment"],
        "rating": 4.6,
        "user_ratings_total": 120,
        "website": "https://cafecentral.example.com",
        "formatted_phone_number": "(11) 3333-4444",
        "business_status": "OPERATIONAL",
        "price_level": 2,
        "reviews": [
            {"author_name": "Ana", "text": "Great coffee, write to contato@cafecentral.example.com"},
            {"author_name": "Carlos Souza", "text": "O gerente foi muito atencioso."},
        ],
    }


@pytest.fixture
def sample_lead() -> dict:
    return {
        "id": "4b1c2f0e-8f5e-4a57-9c8e-2f6f1f0b7a11",
        "name": "Cafe Central",
        "address": "Av. Paulista, 1000 - São Paulo",
        "latitude": -23.5614,
        "longitude": -46.6559,
        "email": None,
        "phone": "(11) 3333-4444",
        "website": "https://cafecentral.example.com",
        "business_type": "cafe",
        "industry": None,
        "description": None,
        "rating": 4.6,
        "reviews": 120,
        "place_id": "ChIJ-cafe-1",
        "notes": None,
        "status": "new",
        "tags": ["has-phone", "has-website"],
        "contact_person": None,
        "company_size": None,
        "revenue": None,
        "last_contact": None,
        "created_at": "2026-10-01T12:00:00+00:00",
        "updated_at": "2026-10-01T12:00:00+00:00",
    }
