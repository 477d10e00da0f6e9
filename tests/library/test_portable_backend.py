"""Tests for the in-process dukpy backend.

These run Babel inside dukpy, so they exercise the real portable compiler.
"""

import json
from pathlib import Path

import dukpy
import pytest

from uikit_library.bundler import CompileError
from uikit_library.bundler.backends import DukpyBackend
from uikit_library.models.bundles import BuildOptions

GLOBAL = 'Function("return this")()'


@pytest.fixture
def component_tree(tmp_path: Path) -> Path:
    """Small component tree with a local module and a fake react package."""
    (tmp_path / "math.js").write_text("export function add(a, b) {\n  return a + b;\n}\n")
    (tmp_path / "index.jsx").write_text(
        'import { add } from "./math";\n'
        f"const root = {GLOBAL};\n"
        "root.total = add(2, 3);\n"
        "root.mode = process.env.NODE_ENV;\n"
    )
    (tmp_path / "App.jsx").write_text(
        "export default function App() {\n"
        '  return <div className="weather">Oslo</div>;\n'
        "}\n"
        f"{GLOBAL}.rendered = App().type;\n"
    )

    react_dir = tmp_path / "node_modules" / "react"
    react_dir.mkdir(parents=True)
    (react_dir / "package.json").write_text(json.dumps({"name": "react", "main": "lib/react.js"}))
    (react_dir / "lib").mkdir()
    (react_dir / "lib" / "react.js").write_text(
        "module.exports = {\n"
        "  createElement: function (type, props) {\n"
        "    return { type: type, props: props };\n"
        "  }\n"
        "};\n"
    )
    return tmp_path


@pytest.mark.integration
class TestDukpyBackend:
    """Test bundling with the portable backend."""

    @pytest.mark.asyncio
    async def test_verify(self):
        assert await DukpyBackend().verify() is True

    @pytest.mark.asyncio
    async def test_bundles_relative_imports_into_one_script(self, component_tree: Path):
        """Given an entry importing a sibling module
        When compiled
        Then the single script runs both modules
        """
        output = await DukpyBackend().compile(str(component_tree / "index.jsx"), BuildOptions(minify=False))

        script = output.output_text
        assert script.startswith("(function (modules) {")
        assert "/* math.js */" in script
        assert "import " not in script
        assert dukpy.evaljs(script + "\ntotal") == 5
        assert dukpy.evaljs(script + "\nmode") == "development"

    @pytest.mark.asyncio
    async def test_jsx_uses_react_without_explicit_import(self, component_tree: Path):
        """Given JSX in a module that never imports React
        When compiled
        Then React is resolved from node_modules and bound automatically
        """
        output = await DukpyBackend().compile(str(component_tree / "App.jsx"), BuildOptions(minify=False))

        assert "node_modules/react/lib/react.js" in output.output_text
        assert dukpy.evaljs(output.output_text + "\nrendered") == "div"

    @pytest.mark.asyncio
    async def test_production_build_is_minified(self, component_tree: Path):
        entry = str(component_tree / "index.jsx")
        backend = DukpyBackend()

        readable = await backend.compile(entry, BuildOptions(minify=False))
        minified = await backend.compile(entry, BuildOptions(minify=True))

        assert len(minified.output_text) < len(readable.output_text)
        assert dukpy.evaljs(minified.output_text + "\nmode") == "production"

    @pytest.mark.asyncio
    async def test_output_is_deterministic(self, component_tree: Path):
        entry = str(component_tree / "index.jsx")
        backend = DukpyBackend()

        first = await backend.compile(entry, BuildOptions(minify=True))
        second = await backend.compile(entry, BuildOptions(minify=True))

        assert first.output_text == second.output_text

    @pytest.mark.asyncio
    async def test_unresolved_import_is_compile_error(self, tmp_path: Path):
        (tmp_path / "index.jsx").write_text('import Chart from "./Chart";\n')

        with pytest.raises(CompileError) as exc_info:
            await DukpyBackend().compile(str(tmp_path / "index.jsx"), BuildOptions(minify=False))

        assert 'Could not resolve "./Chart"' in exc_info.value.message

    @pytest.mark.asyncio
    async def test_syntax_error_is_compile_error(self, tmp_path: Path):
        (tmp_path / "index.jsx").write_text("export const = ;\n")

        with pytest.raises(CompileError):
            await DukpyBackend().compile(str(tmp_path / "index.jsx"), BuildOptions(minify=False))

    @pytest.mark.asyncio
    async def test_missing_entry_is_compile_error(self, tmp_path: Path):
        with pytest.raises(CompileError):
            await DukpyBackend().compile(str(tmp_path / "nope.jsx"), BuildOptions(minify=False))

    @pytest.mark.asyncio
    async def test_bundles_typed_tsx_entry(self, component_tree: Path):
        """Given a .tsx entry with type annotations importing a .ts module
        When compiled
        Then the types are stripped and the script runs
        """
        (component_tree / "utils.ts").write_text(
            "export function celsius(f: number): number {\n  return Math.round((f - 32) * 5 / 9);\n}\n"
        )
        (component_tree / "Weather.tsx").write_text(
            'import { celsius } from "./utils";\n'
            "type Props = { city: string; fahrenheit: number };\n"
            "export default function Weather(props: Props) {\n"
            "  return <div title={props.city}>{celsius(props.fahrenheit)}</div>;\n"
            "}\n"
            "const root: any = " + GLOBAL + ";\n"
            'const view = Weather({ city: "Oslo", fahrenheit: 50 });\n'
            "root.rendered = view.type;\n"
            "root.temperature = celsius(50);\n"
        )

        output = await DukpyBackend().compile(str(component_tree / "Weather.tsx"), BuildOptions(minify=False))

        script = output.output_text
        assert "/* utils.ts */" in script
        assert "Props" not in script
        assert dukpy.evaljs(script + "\nrendered") == "div"
        assert dukpy.evaljs(script + "\ntemperature") == 10

    @pytest.mark.asyncio
    async def test_jsx_fragment_reports_native_backend(self, tmp_path: Path):
        (tmp_path / "index.tsx").write_text("export const List = () => <><li /></>;\n")

        with pytest.raises(CompileError) as exc_info:
            await DukpyBackend().compile(str(tmp_path / "index.tsx"), BuildOptions(minify=False))

        assert "JSX fragments require the native esbuild backend" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_relative_entry_resolves_against_cwd(self, component_tree: Path):
        """Given a backend rooted at the components directory
        When compiling a relative entry path
        Then it resolves against that directory, not the process cwd
        """
        output = await DukpyBackend(cwd=str(component_tree)).compile("index.jsx", BuildOptions(minify=False))

        assert dukpy.evaljs(output.output_text + "\ntotal") == 5

    @pytest.mark.asyncio
    async def test_shutdown_is_noop(self):
        await DukpyBackend().shutdown()
