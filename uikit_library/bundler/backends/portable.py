"""Portable in-process backend.

Runs Babel inside dukpy's embedded JavaScript interpreter, so no external
process is ever spawned. Modules are transpiled to CommonJS, linked by
walking their require() calls and wrapped into a single IIFE with a small
module table.

Contract:
- Inputs: Entry path of a JavaScript/JSX/TypeScript module, build options
- Outputs: CompileOutput with the bundled script
- Side Effects: Reads source files
"""

import asyncio
import json
import logging
import os
import re
from collections import deque
from pathlib import Path

import dukpy
import rjsmin

from uikit_library.models.bundles import BackendVariant
from uikit_library.models.bundles import BuildOptions
from uikit_library.models.bundles import CompileOutput

from ..errors import CompileError
from .base import CompilerBackend

logger = logging.getLogger(__name__)

SMOKE_SOURCE = "export const ok = <div />;\n"

RESOLVE_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js", ".mjs", ".cjs", ".json")
TYPESCRIPT_SUFFIXES = frozenset({".ts", ".tsx", ".mts", ".cts"})
# Babel 6 has no TypeScript preset; its flow plugin strips the annotation
# syntax the two languages share.
TYPE_STRIP_PLUGINS = ["transform-flow-strip-types"]

REQUIRE_PATTERN = re.compile(r"""\brequire\(\s*(['"])([^'"\n]+)\1\s*\)""")
NODE_ENV_PATTERN = re.compile(r"\bprocess\.env\.NODE_ENV\b")
BARE_JSX_FACTORY_PATTERN = re.compile(r"(?<![\w$.])React\.createElement\b")
JSX_FRAGMENT_PATTERN = re.compile(r"<>|</>")
REACT_BINDING_PATTERN = re.compile(r"\b(?:var|let|const|function)\s+React\b")
USE_STRICT_PATTERN = re.compile(r"""\A\s*(['"])use strict\1;?\n?""")

MODULE_RUNTIME = """(function (modules) {
  var cache = {};
  function __uikit_require(id) {
    var cached = cache[id];
    if (cached) return cached.exports;
    var module = (cache[id] = { exports: {} });
    modules[id].call(module.exports, module, module.exports, __uikit_require);
    return module.exports;
  }
  __uikit_require(0);
})(["""


class DukpyBackend(CompilerBackend):
    """Bundle JavaScript/JSX/TypeScript modules without spawning a process.

    TypeScript is compiled by stripping type annotations, so TypeScript-only
    constructs Babel 6 cannot parse (enums, `as` casts, JSX fragments) fail
    with CompileError and need the native backend.
    """

    variant = BackendVariant.PORTABLE

    def __init__(self, cwd: str | None = None) -> None:
        """Initialize the portable backend.

        Args:
            cwd: Base directory for relative entry paths (same role as the
                native backend's working directory)
        """
        self.cwd = cwd

    async def verify(self) -> bool:
        try:
            output = await asyncio.to_thread(dukpy.jsx_compile, SMOKE_SOURCE)
        except Exception as e:
            logger.warning(f"Portable smoke compile failed: {e}")
            return False
        return "createElement" in output

    async def compile(self, entry_path: str, options: BuildOptions) -> CompileOutput:
        return await asyncio.to_thread(self._bundle, entry_path, options)

    async def shutdown(self) -> None:
        # Nothing is held between builds
        logger.debug("Portable backend shut down")

    def _bundle(self, entry_path: str, options: BuildOptions) -> CompileOutput:
        entry = Path(entry_path)
        if not entry.is_absolute() and self.cwd is not None:
            entry = Path(self.cwd) / entry
        if not entry.is_file():
            raise CompileError(f'Could not resolve "{entry_path}"')
        entry = entry.resolve()

        node_env = json.dumps("production" if options.minify else "development")
        ids: dict[Path, int] = {entry: 0}
        modules: list[str] = []
        pending = deque([entry])

        while pending:
            path = pending.popleft()
            code = self._transform(path, node_env)

            def link(match: re.Match[str], importer: Path = path) -> str:
                dependency = self._resolve(match.group(2), importer)
                if dependency not in ids:
                    ids[dependency] = len(ids)
                    pending.append(dependency)
                return f"require({ids[dependency]})"

            code = REQUIRE_PATTERN.sub(link, code)
            label = os.path.relpath(path, entry.parent).replace(os.sep, "/")
            modules.append(f"/* {label} */\nfunction (module, exports, require) {{\n{code}\n}}")

        text = MODULE_RUNTIME + "\n" + ",\n".join(modules) + "\n]);\n"
        if options.minify:
            text = rjsmin.jsmin(text) + "\n"

        logger.debug(f"Portable backend linked {len(modules)} modules for {entry_path}")
        return CompileOutput(output_text=text)

    def _transform(self, path: Path, node_env: str) -> str:
        """Turn one source file into CommonJS code."""
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CompileError(f"{path}: {e}") from e

        if path.suffix == ".json":
            return f"module.exports = {source.strip() or 'null'};"

        if "node_modules" in path.parts:
            # Published packages ship CommonJS already
            code = source
        else:
            code = self._inject_jsx_runtime(self._babel(path, source))

        return NODE_ENV_PATTERN.sub(node_env, code)

    @staticmethod
    def _babel(path: Path, source: str) -> str:
        typescript = path.suffix in TYPESCRIPT_SUFFIXES
        try:
            if typescript:
                return dukpy.jsx_compile(source, plugins=TYPE_STRIP_PLUGINS)
            return dukpy.jsx_compile(source)
        except dukpy.JSRuntimeError as e:
            message = f"{path}: {e}"
            if JSX_FRAGMENT_PATTERN.search(source):
                message += " (JSX fragments require the native esbuild backend)"
            elif typescript:
                message += " (this TypeScript syntax requires the native esbuild backend)"
            raise CompileError(message) from e

    @staticmethod
    def _inject_jsx_runtime(code: str) -> str:
        """Bind React for modules that use JSX without importing it."""
        if not BARE_JSX_FACTORY_PATTERN.search(code) or REACT_BINDING_PATTERN.search(code):
            return code
        binding = 'var React = require("react");\n'
        directive = USE_STRICT_PATTERN.match(code)
        if directive:
            return code[: directive.end()] + binding + code[directive.end() :]
        return binding + code

    def _resolve(self, specifier: str, importer: Path) -> Path:
        if specifier.startswith(("./", "../", "/")):
            found = self._probe(importer.parent / specifier)
        else:
            found = self._resolve_package(specifier, importer.parent)
        if found is None:
            raise CompileError(f'Could not resolve "{specifier}" (imported by {importer})')
        return found.resolve()

    @staticmethod
    def _probe(base: Path) -> Path | None:
        if base.is_file():
            return base
        for ext in RESOLVE_EXTENSIONS:
            candidate = base.with_name(base.name + ext)
            if candidate.is_file():
                return candidate
        if base.is_dir():
            for ext in RESOLVE_EXTENSIONS:
                candidate = base / f"index{ext}"
                if candidate.is_file():
                    return candidate
        return None

    def _resolve_package(self, specifier: str, directory: Path) -> Path | None:
        parts = specifier.split("/")
        name_parts = 2 if specifier.startswith("@") else 1
        name = "/".join(parts[:name_parts])
        subpath = "/".join(parts[name_parts:])

        for parent in (directory, *directory.parents):
            package_dir = parent / "node_modules" / name
            if not package_dir.is_dir():
                continue
            if subpath:
                return self._probe(package_dir / subpath)
            return self._probe(package_dir / self._package_main(package_dir))
        return None

    @staticmethod
    def _package_main(package_dir: Path) -> str:
        manifest = package_dir / "package.json"
        if not manifest.is_file():
            return "index"
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise CompileError(f"{manifest}: {e}") from e
        for field in ("browser", "main"):
            value = data.get(field)
            if isinstance(value, str) and value:
                return value
        return "index"
