"""Pytest configuration and fixtures."""

import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["EMAIL_USER"] = ""

import random

import pytest
from fastapi.testclient import TestClient

from companion.dependencies import get_conversation_handler, get_knowledge_store
from companion.services.conversation import ConversationHandler
from companion.services.knowledge_store import KnowledgeStore

SCENARIO_DOCUMENT = {
    "knowledge_base": {
        "anxiety": {
            "keywords": ["anxious", "worry"],
            "definition": "D",
            "immediate_relief": ["breathe"],
            "long_term_solutions": ["therapy"],
            "root_causes": ["stress"],
            "types": ["panic"],
            "impacts": ["sleep"],
            "when_to_seek_help": "see a doctor",
            "resources": ["hotline"],
        }
    }
}


@pytest.fixture
def scenario_store():
    """The single-topic store used by the reference scenarios."""
    return KnowledgeStore.from_document(SCENARIO_DOCUMENT)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def handler(scenario_store, rng):
    return ConversationHandler(scenario_store, rng=rng)


@pytest.fixture
def client(scenario_store, handler):
    """FastAPI test client wired to the scenario store."""
    from companion.main import app

    app.dependency_overrides[get_knowledge_store] = lambda: scenario_store
    app.dependency_overrides[get_conversation_handler] = lambda: handler

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
