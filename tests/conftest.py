"""
Pytest configuration for the Random User MCP server.

Provides fixtures for:
- A realistic upstream user record
- A record factory for building result sets
- A recording fake of the upstream collaborator
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Mapping, Optional

import pytest

from randomuser_mcp.errors import UpstreamTransportError

SAMPLE_USER: Dict[str, Any] = {
    "gender": "female",
    "name": {"title": "Ms", "first": "Ada", "last": "Lovelace"},
    "location": {
        "street": {"number": 4512, "name": "Park Lane"},
        "city": "London",
        "state": "Greater London",
        "country": "United Kingdom",
        "postcode": "W1 2AB",
        "coordinates": {"latitude": "51.5074", "longitude": "-0.1278"},
        "timezone": {"offset": "+0:00", "description": "Western Europe Time, London, Lisbon"},
    },
    "email": "ada.lovelace@example.com",
    "login": {
        "uuid": "7a0eed16-9430-4d68-901f-c0d4c1c3bf00",
        "username": "bluecat123",
        "password": "analytical",
        "salt": "s4lt",
        "md5": "d41d8cd98f00b204e9800998ecf8427e",
        "sha1": "da39a3ee5e6b4b0d3255bfef95601890afd80709",
        "sha256": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
    },
    "dob": {"date": "1993-07-20T09:44:18.674Z", "age": 31},
    "registered": {"date": "2010-05-01T12:00:00.000Z", "age": 14},
    "phone": "020 7946 0018",
    "cell": "07700 900123",
    "id": {"name": "NINO", "value": "AB 12 34 56 C"},
    "picture": {
        "large": "https://randomuser.me/api/portraits/women/1.jpg",
        "medium": "https://randomuser.me/api/portraits/med/women/1.jpg",
        "thumbnail": "https://randomuser.me/api/portraits/thumb/women/1.jpg",
    },
    "nat": "GB",
}


def make_user(gender: str = "female", nat: str = "GB", index: int = 0) -> Dict[str, Any]:
    user = copy.deepcopy(SAMPLE_USER)
    user["gender"] = gender
    user["nat"] = nat
    user["name"]["first"] = f"User{index}"
    user["email"] = f"user{index}.{nat.lower()}@example.com"
    return user


class FakeUserSource:
    """
    Stand-in for the upstream API.

    Records every parameter map it receives and answers with `results` users
    (1 when absent) of the requested gender and nationality. When `fail_on_call`
    is set, that call (1-based) raises UpstreamTransportError.
    """

    def __init__(self, fail_on_call: Optional[int] = None) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.fail_on_call = fail_on_call

    def fetch_users(self, params: Mapping[str, Any]) -> List[Dict[str, Any]]:
        self.calls.append(dict(params))
        if self.fail_on_call == len(self.calls):
            raise UpstreamTransportError("Uh oh, something has gone wrong.")
        count = int(params.get("results", 1))
        gender = params.get("gender", "female")
        nat = params.get("nat", "GB")
        return [make_user(gender=gender, nat=nat, index=index) for index in range(count)]


@pytest.fixture
def sample_user() -> Dict[str, Any]:
    """A fresh copy of a realistic upstream record."""
    return copy.deepcopy(SAMPLE_USER)


@pytest.fixture
def user_factory() -> Callable[..., Dict[str, Any]]:
    return make_user


@pytest.fixture
def fake_source() -> FakeUserSource:
    return FakeUserSource()


@pytest.fixture
def failing_source() -> FakeUserSource:
    """Fails on the second upstream call."""
    return FakeUserSource(fail_on_call=2)
