"""Merge declared, user and decrypted properties; optionally discover sources."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, MutableMapping, Protocol

from scanbridge.config import BridgeSettings
from scanbridge.coverage import compute_coverage_exclusions
from scanbridge.csv_codec import join_csv, split_csv
from scanbridge.discovery import DiscoveryScope, iter_discovered_sources
from scanbridge.paths import normalize_path
from scanbridge.properties import (
    COVERAGE_EXCLUSIONS,
    HOST_URL,
    PROJECT_BASEDIR,
    PROJECT_SOURCE_DIRS,
    PROJECT_TEST_DIRS,
    SCAN_ALL_SOURCES,
    declares_java_binaries,
    is_report_property,
    is_source_or_test_dirs_key,
    parse_flag,
)
from scanbridge.schema import ProjectSnapshot

logger = logging.getLogger(__name__)


class PropertyDecryptor(Protocol):
    def decrypt_properties(self, properties: Mapping[str, str]) -> Mapping[str, str]:
        """Return decrypted values for the keys holding encrypted placeholders."""
        ...


class NoDecryption:
    def decrypt_properties(self, properties: Mapping[str, str]) -> Mapping[str, str]:
        return {}


def scan_all_enabled(user_overrides: Mapping[str, str], settings: BridgeSettings) -> bool:
    default = True if settings.scan_all is None else settings.scan_all
    return parse_flag(user_overrides.get(SCAN_ALL_SOURCES), default=default)


def excluded_report_files(properties: Mapping[str, str], *, base_dir: Path) -> set[Path]:
    return {
        normalize_path(entry, base=base_dir)
        for key, value in properties.items()
        if is_report_property(key)
        for entry in split_csv(value)
    }


def declared_source_paths(properties: Mapping[str, str], *, base_dir: Path) -> set[Path]:
    """Every path under sonar.sources/sonar.tests, top-level and per module."""
    return {
        normalize_path(entry, base=base_dir)
        for key, value in properties.items()
        if is_source_or_test_dirs_key(key)
        for entry in split_csv(value)
    }


def _skip_message(overridden_property: str) -> str:
    return (
        f"Parameter {SCAN_ALL_SOURCES} is enabled but the scanner will not collect "
        f"additional sources because {overridden_property} has been overridden."
    )


@dataclass(frozen=True)
class PropertyReconciler:
    snapshot: ProjectSnapshot
    decryptor: PropertyDecryptor = field(default_factory=NoDecryption)
    settings: BridgeSettings = field(default_factory=BridgeSettings)

    def overridden_source_property(self, user_overrides: Mapping[str, str]) -> str | None:
        explicit = self.snapshot.top_level_module().properties
        for key in (PROJECT_SOURCE_DIRS, PROJECT_TEST_DIRS):
            if key in user_overrides or key in explicit:
                return key
        return None

    def reconcile(
        self,
        declared_properties: Mapping[str, str],
        user_overrides: Mapping[str, str],
        *,
        discovery_enabled: bool,
        project_base_dir: str | os.PathLike[str],
    ) -> dict[str, str]:
        props = dict(declared_properties)
        props.update(user_overrides)
        props.update(self.decryptor.decrypt_properties(props))
        if not discovery_enabled:
            return props
        logger.info(
            "Parameter %s is enabled. The scanner will attempt to collect additional sources.",
            SCAN_ALL_SOURCES,
        )
        overridden = self.overridden_source_property(user_overrides)
        if overridden is not None:
            logger.warning(_skip_message(overridden))
            return props
        self.collect_all_sources(
            props,
            project_base_dir=project_base_dir,
            include_binary_languages=declares_java_binaries(user_overrides),
        )
        return props

    def collect_all_sources(
        self,
        props: MutableMapping[str, str],
        *,
        project_base_dir: str | os.PathLike[str],
        include_binary_languages: bool,
    ) -> list[str]:
        """Append discovered files to sonar.sources and exclude them from coverage.

        Mutates *props* in place and returns the discovered absolute paths.
        Walk and relativization failures are logged; files found before a
        walk failure are still merged.
        """
        base = normalize_path(project_base_dir)
        scope = DiscoveryScope.build(
            base,
            declared_sources=declared_source_paths(props, base_dir=base),
            skipped_dirs=self.snapshot.skipped_base_dirs,
            excluded_report_files=excluded_report_files(props, base_dir=base),
            include_binary_languages=include_binary_languages,
            extra_excluded_dir_names=self.settings.excluded_dirs,
        )
        collected: list[str] = []
        try:
            for path in iter_discovered_sources(scope):
                collected.append(str(path))
        except OSError as exc:
            logger.warning("Could not walk %s to collect additional sources: %s", base, exc)
        logger.debug("Collected %d additional source file(s) under %s", len(collected), base)
        if not collected:
            return collected

        merged = split_csv(props.get(PROJECT_SOURCE_DIRS))
        merged.extend(collected)
        props[PROJECT_SOURCE_DIRS] = join_csv(merged)

        try:
            props[COVERAGE_EXCLUSIONS] = compute_coverage_exclusions(
                base, props.get(COVERAGE_EXCLUSIONS, ""), collected
            )
        except ValueError as exc:
            logger.warning("Could not exclude collected sources from coverage: %s", exc)
        return collected


@dataclass
class ReconciliationContext:
    """State of one property-collection run; build a new one per invocation."""

    snapshot: ProjectSnapshot
    user_properties: dict[str, str] = field(default_factory=dict)
    env_properties: dict[str, str] = field(default_factory=dict)
    settings: BridgeSettings = field(default_factory=BridgeSettings)
    server_version: str | None = None

    def lookup(self, key: str, module_properties: Mapping[str, str]) -> str | None:
        if key in self.user_properties:
            return self.user_properties[key]
        if key in self.env_properties:
            return self.env_properties[key]
        return module_properties.get(key)

    def is_hosted_service(self) -> bool:
        for module in self.snapshot.modules:
            host_url = self.lookup(HOST_URL, module.properties)
            if host_url is not None and host_url.startswith(self.settings.hosted_url):
                return True
        return False

    def project_base_dir(self, properties: Mapping[str, str]) -> str:
        base_dir = properties.get(PROJECT_BASEDIR)
        if base_dir:
            return base_dir
        return self.snapshot.top_level_module().base_dir

    def collect_properties(self, decryptor: PropertyDecryptor | None = None) -> dict[str, str]:
        # Raises ConfigurationError before any other work.
        self.snapshot.top_level_module()
        declared = dict(self.snapshot.declared_properties)
        declared.update(self.env_properties)
        reconciler = PropertyReconciler(
            snapshot=self.snapshot,
            decryptor=decryptor if decryptor is not None else NoDecryption(),
            settings=self.settings,
        )
        return reconciler.reconcile(
            declared,
            self.user_properties,
            discovery_enabled=scan_all_enabled(self.user_properties, self.settings),
            project_base_dir=self.project_base_dir(declared),
        )
