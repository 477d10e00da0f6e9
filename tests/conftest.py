"""
Shared pytest fixtures for the uikit test suite.

Provides fixtures for:
- Temporary storage directories
- Fake compiler backends with call counters
- Bundlers wired to fake backends
"""

import tempfile
from collections.abc import Callable
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from uikit_library.bundler import BackendResolver
from uikit_library.bundler import BuildExecutor
from uikit_library.bundler import ComponentBundler
from uikit_library.bundler import RecoveryPolicy
from uikit_library.bundler.backends.base import CompilerBackend
from uikit_library.models.bundles import BackendVariant
from uikit_library.models.bundles import BuildOptions
from uikit_library.models.bundles import CompileOutput
from uikit_library.models.bundles import ProcessMode


class FakeBackend(CompilerBackend):
    """Scriptable backend that counts every call.

    Args:
        variant: Variant reported by the backend
        verify_results: Results of successive verify() calls; the last one repeats.
            Exceptions are raised instead of returned.
        compile_results: Results of successive compile() calls. Strings become the
            output text, exceptions are raised. Once exhausted, render() is used.
        render: Produces output text for an entry path
    """

    def __init__(
        self,
        variant: BackendVariant,
        verify_results: list[Any] | None = None,
        compile_results: list[Any] | None = None,
        render: Callable[[str], str] | None = None,
    ) -> None:
        self.variant = variant
        self._verify_results = list(verify_results) if verify_results is not None else [True]
        self._compile_results = list(compile_results or [])
        self._render = render or (lambda entry: f"(()=>{{/* {self.variant.value}:{entry} */}})();")
        self.verify_calls = 0
        self.compile_calls = 0
        self.shutdown_calls = 0
        self.last_options: BuildOptions | None = None

    async def verify(self) -> bool:
        self.verify_calls += 1
        result = self._verify_results[0] if len(self._verify_results) == 1 else self._verify_results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    async def compile(self, entry_path: str, options: BuildOptions) -> CompileOutput:
        self.compile_calls += 1
        self.last_options = options
        if self._compile_results:
            result = self._compile_results.pop(0)
            if isinstance(result, BaseException):
                raise result
            return CompileOutput(output_text=result)
        return CompileOutput(output_text=self._render(entry_path))

    async def shutdown(self) -> None:
        self.shutdown_calls += 1


@pytest.fixture
def temp_storage_dir() -> Generator[Path, None, None]:
    """Create temporary storage directory for tests.

    Automatically cleaned up after test completes.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_storage_env(temp_storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point UIKIT_HOME at a temp directory and clear mode variables.

    Returns:
        Path to temporary storage directory
    """
    monkeypatch.setenv("UIKIT_HOME", str(temp_storage_dir))
    monkeypatch.delenv("UIKIT_CONFIG_DIR", raising=False)
    monkeypatch.delenv("UIKIT_MODE", raising=False)
    monkeypatch.delenv("NODE_ENV", raising=False)
    return temp_storage_dir


@pytest.fixture
def make_backend() -> Callable[..., FakeBackend]:
    """Factory for fake backends.

    Example:
        >>> def test_native(make_backend):
        ...     native = make_backend(BackendVariant.NATIVE, verify_results=[False])
    """

    def _make(variant: BackendVariant = BackendVariant.NATIVE, **kwargs: Any) -> FakeBackend:
        return FakeBackend(variant, **kwargs)

    return _make


@pytest.fixture
def make_bundler() -> Callable[..., ComponentBundler]:
    """Wire a ComponentBundler around fake native and portable backends.

    Factories return the same instances on every probe so call counts
    accumulate across resets.
    """

    def _make(
        native: CompilerBackend,
        portable: CompilerBackend,
        mode: ProcessMode = ProcessMode.PRODUCTION,
    ) -> ComponentBundler:
        resolver = BackendResolver(native_factory=lambda: native, portable_factory=lambda: portable)
        executor = BuildExecutor(resolver, mode=mode)
        recovery = RecoveryPolicy(resolver, executor)
        return ComponentBundler(executor, recovery, mode=mode)

    return _make
