"""Pipeline orchestration for the generate and unused flows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .config import ResgenConfig, load_config
from .generators import AggregatedStructGenerator, StructGenerator, discover_generators
from .logging import get_logger
from .models import Resources
from .project_scanner import ProjectManifest, ProjectScanner
from .render import SwiftRenderer, write_if_changed
from .resources import collect_resources
from .unused import find_unused_images, objc_convention, source_files_for_scan, swift_convention
from .validators import validate


@dataclass
class GenerateOutcome:
    """Result of a generate run."""

    path: Path
    changed: bool
    diff: str
    dry_run: bool
    unused_images: Optional[List[str]] = None


class Orchestrator:
    """Coordinates scanning, parsing, generation, validation and rendering."""

    def __init__(
        self,
        scanner: ProjectScanner | None = None,
        generators: Optional[Iterable[StructGenerator]] = None,
        renderer: SwiftRenderer | None = None,
        workers: int | None = None,
    ) -> None:
        self.scanner = scanner or ProjectScanner()
        self._generator_overrides = list(generators) if generators is not None else None
        self._renderer = renderer
        self.workers = workers
        self.logger = get_logger("orchestrator")

    def run_generate(
        self,
        path: str,
        *,
        output: str | None = None,
        dry_run: bool = False,
    ) -> GenerateOutcome:
        """Generate the resource accessor file for the project at ``path``."""
        project_path = Path(path).expanduser().resolve()
        config = self._load_config(project_path, output=output)
        self.logger.info("Starting generate run for %s (module=%s)", project_path, config.module_name)

        manifest = self.scanner.scan(project_path, config)
        resources = collect_resources(manifest.resources)
        self.logger.debug("Collected %d resource(s)", len(resources))

        generators = self._select_generators(config)
        self.logger.debug("Selected generators: %s", ", ".join(generator.name for generator in generators))
        tree = AggregatedStructGenerator(generators).generate(resources, config.access_level)
        for conflict in tree.conflicts:
            self.logger.debug("Merge conflict: %s", conflict.describe())
        external, internal = validate(tree)

        unused: Optional[List[str]] = None
        if config.unused_images:
            unused = self._find_unused(config, manifest, resources)

        renderer = self._resolve_renderer(config)
        content = renderer.render(
            external,
            internal,
            module_name=config.module_name,
            access_level=config.access_level,
            imports=config.imports,
            objc_compat=config.objc_compat,
            unused_images=unused,
        )

        result = write_if_changed(config.output_path, content, dry_run=dry_run)
        return GenerateOutcome(
            path=result.path,
            changed=result.changed,
            diff=result.diff,
            dry_run=dry_run,
            unused_images=unused,
        )

    def run_unused(self, path: str) -> List[str]:
        """Report declared images that neither layouts nor sources reference."""
        project_path = Path(path).expanduser().resolve()
        config = self._load_config(project_path)
        manifest = self.scanner.scan(project_path, config)
        resources = collect_resources(manifest.resources)
        return self._find_unused(config, manifest, resources)

    def _find_unused(self, config: ResgenConfig, manifest: ProjectManifest, resources: Resources) -> List[str]:
        conventions = [swift_convention(), objc_convention(config.module_name)]
        sources = source_files_for_scan(manifest.sources, conventions, generated_output=config.output_path)
        self.logger.debug("Scanning %d source file(s) for image references", len(sources))
        unused = find_unused_images(
            resources.declared_image_names(),
            resources.used_image_names(),
            sources,
            module_name=config.module_name,
            workers=self.workers,
        )
        self.logger.info("Found %d potentially unused image(s)", len(unused))
        return unused

    @staticmethod
    def _load_config(project_path: Path, *, output: str | None = None) -> ResgenConfig:
        if not project_path.exists():
            raise FileNotFoundError(f"Project path not found: {project_path}")
        config = load_config(project_path)
        if output:
            config.output = Path(output).expanduser().resolve()
        return config

    def _select_generators(self, config: ResgenConfig) -> List[StructGenerator]:
        if self._generator_overrides is not None:
            return list(self._generator_overrides)
        return discover_generators(config.generators.enabled or None)

    def _resolve_renderer(self, config: ResgenConfig) -> SwiftRenderer:
        if self._renderer is not None:
            return self._renderer
        return SwiftRenderer(config.templates_dir)

