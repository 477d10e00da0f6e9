"""Fixtures for daemon API tests.

The app is built from explicit settings and its lifespan is not run; tests
place a registry backed by fake backends on app.state instead.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from uikit_library.bundler import ComponentBundler
from uikit_library.components import ComponentRegistry
from uikit_library.config import BundlerSettings
from uikitd.main import create_app


@pytest.fixture
def components_dir(tmp_path: Path) -> Path:
    (tmp_path / "weather").mkdir()
    (tmp_path / "weather" / "index.jsx").write_text("export default () => null;\n")
    return tmp_path


@pytest.fixture
def app(mock_storage_env: Path, components_dir: Path) -> FastAPI:
    return create_app(BundlerSettings(mode="production", components_dir=str(components_dir)))


@pytest.fixture
def install_bundler(app: FastAPI, components_dir: Path) -> Callable[[ComponentBundler], ComponentRegistry]:
    """Attach a bundler and a registry with weather-dashboard registered."""

    def _install(bundler: ComponentBundler) -> ComponentRegistry:
        registry = ComponentRegistry(bundler, components_dir=components_dir)
        registry.register("weather-dashboard", "weather/index.jsx")
        app.state.bundler = bundler
        app.state.registry = registry
        return registry

    return _install


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create FastAPI test client."""
    return TestClient(app)
