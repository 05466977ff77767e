import pytest

from src.forum.adapters.node_mapper import ReflectiveNodeMapper
from src.forum.application.service import MembershipService
from src.forum.domain.mapping import EntityRegistry
from src.forum.domain.models import GoldMembership


@pytest.fixture
def gold():
    return GoldMembership()


@pytest.fixture
def service():
    return MembershipService()


@pytest.fixture
def mapper():
    return ReflectiveNodeMapper()


@pytest.fixture
def fresh_registry():
    """An empty registry, so tests never touch the domain's label bindings."""
    return EntityRegistry()
