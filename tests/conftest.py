"""Shared fixtures for tests."""

import sqlite3
from pathlib import Path

import pytest

from modelgen.resolver.pipeline import resolve_model
from modelgen.schema.loader import parse_model_from_string
from modelgen.synth.synthesizer import synthesize


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def organizations_yaml() -> str:
    """Return the Organization/User model YAML string."""
    return """
entities:
  - name: Organization
    traits: [keys]

  - name: User
    traits: [keys]
    relations:
      - alias: Organization
        entity: Organization
        modifiers: [hasOne]
"""


@pytest.fixture
def blog_yaml() -> str:
    """Return a model with generated members, hooks and collections."""
    return """
types:
  - name: Visibility
    type: enum
    values: [Public, Private]

entities:
  - name: User
    traits: [keys]
    relations:
      - entity: Post
        modifiers: [hasMany]

  - name: Post
    traits: [id, timestamps]
    attributes:
      - name: Title
        type: String
        modifiers: [required]
      - name: Slug
        type: String
        modifiers: [required, unique, indexed]
      - name: Views
        type: Int
      - name: Visibility
        type: Visibility
    relations:
      - alias: Author
        entity: User
        modifiers: [belongsTo, required]
    hooks:
      create: [before, after]
      delete: [after]
"""


@pytest.fixture
def organizations_model(organizations_yaml):
    """Return a parsed Organization/User model."""
    return parse_model_from_string(organizations_yaml)


@pytest.fixture
def organizations(organizations_yaml):
    """Return the resolved Organization/User model."""
    return resolve_model(parse_model_from_string(organizations_yaml))


@pytest.fixture
def organizations_synthesis(organizations):
    return synthesize(organizations)


@pytest.fixture
def blog(blog_yaml):
    """Return the resolved blog model."""
    return resolve_model(parse_model_from_string(blog_yaml))


@pytest.fixture
def blog_synthesis(blog):
    return synthesize(blog)


@pytest.fixture
def conn():
    """Return an in-memory sqlite3 connection."""
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()
