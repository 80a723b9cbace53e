"""Shared fixtures: recorded Shopify GraphQL responses."""

import json
import os

import pytest

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def load_response_fixture(name):
    fixture_path = os.path.join(FIXTURES_DIR, name)
    with open(fixture_path, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def blogs_data():
    return load_response_fixture("blogs_response.json")["data"]


@pytest.fixture
def game_releases_data():
    return load_response_fixture("game_releases_response.json")["data"]


@pytest.fixture
def videos_data():
    return load_response_fixture("videos_response.json")["data"]
