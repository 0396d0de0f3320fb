import pytest

from propbuilder.artifacts import MemoryArtifactSink
from propbuilder.diagnostics import Messager


@pytest.fixture
def sink() -> MemoryArtifactSink:
    return MemoryArtifactSink()


@pytest.fixture
def messager() -> Messager:
    return Messager()
