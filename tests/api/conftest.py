"""
API test fixtures.

Provides a TestClient whose service dependencies are replaced with stubs.
The application lifespan is not entered, so no diagram engine is configured.

Dependencies: fastapi.testclient
System role: API test infrastructure
"""

import pytest
from fastapi.testclient import TestClient

from visualizer.api.deps import (
    get_ai_checker,
    get_export_encoder,
    get_renderer,
    get_session_registry,
    get_settings_dependency,
)
from visualizer.application.services import EditorSessionRegistry, ExportEncoder
from visualizer.configs import Settings
from visualizer.configs.editor import EditorSettings
from visualizer.main import create_app


@pytest.fixture
def registry() -> EditorSessionRegistry:
    return EditorSessionRegistry()


@pytest.fixture
def client(stub_renderer, stub_ai_checker, registry) -> TestClient:
    """Provide TestClient with stubbed checkers and a fresh session registry."""
    app = create_app()
    app.dependency_overrides[get_renderer] = lambda: stub_renderer
    app.dependency_overrides[get_ai_checker] = lambda: stub_ai_checker
    app.dependency_overrides[get_export_encoder] = lambda: ExportEncoder()
    app.dependency_overrides[get_session_registry] = lambda: registry
    app.dependency_overrides[get_settings_dependency] = lambda: Settings(
        editor=EditorSettings(debounce_ms=10)
    )
    return TestClient(app)
