"""
Test Configuration
==================

Pytest configuration with fixtures shared by unit and integration tests.
Provides test settings, mock render backends and wired servers.
"""

import pytest
from pydantic_settings import SettingsConfigDict

from mcp_mermaid.config.settings import Settings
from mcp_mermaid.core.orchestrator import RenderOrchestrator
from mcp_mermaid.mcp_server.handlers import ToolDispatcher
from mcp_mermaid.mcp_server.server import MermaidMCPServer, create_server
from mcp_mermaid.mcp_server.tools import ToolRegistry, create_default_registry

from tests.utils.mocks import MockRenderBackend


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    __test__ = False

    environment: str = "testing"
    debug: bool = True
    browser_pool_size: int = 1
    render_timeout: float = 5.0
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_file=".env.test", env_prefix="MCP_MERMAID_TEST_")


@pytest.fixture
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture
def mock_backend() -> MockRenderBackend:
    """Deterministic render backend."""
    return MockRenderBackend()


@pytest.fixture
def registry() -> ToolRegistry:
    """Registry holding the mermaid tool."""
    return create_default_registry()


@pytest.fixture
def orchestrator(mock_backend: MockRenderBackend) -> RenderOrchestrator:
    """Orchestrator over the mock backend."""
    return RenderOrchestrator(mock_backend)


@pytest.fixture
def dispatcher(registry: ToolRegistry, orchestrator: RenderOrchestrator) -> ToolDispatcher:
    """Dispatcher over the mock backend."""
    return ToolDispatcher(registry, orchestrator)


@pytest.fixture
def mermaid_server(test_settings: TestSettings, mock_backend: MockRenderBackend) -> MermaidMCPServer:
    """Fully wired MCP server using the mock backend."""
    return create_server(test_settings, backend=mock_backend)


@pytest.fixture
def sample_mermaid() -> str:
    """Small flowchart."""
    return "graph TD; A-->B"


def pytest_collection_modifyitems(config, items):
    """Add markers based on file paths."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
