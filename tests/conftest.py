"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from podsmith import Config
from podsmith.details.targets.aggregate_target import AggregateTarget
from podsmith.details.targets.file_accessor import FileAccessor
from podsmith.details.targets.pod_target import PodTarget
from podsmith.details.targets.target import Platform


@pytest.fixture
def sandbox_root(tmp_path: Path) -> Path:
    """Pods sandbox inside the temporary directory."""
    return tmp_path / "Pods"


@pytest.fixture
def config(sandbox_root: Path) -> Config:
    return Config(sandbox_root)


@pytest.fixture
def ios() -> Platform:
    return Platform("ios", "9.0")


@pytest.fixture
def make_pod_target(ios: Platform) -> Callable[..., PodTarget]:
    """Build a pod target, file accessors default to a single empty one.

    Usage:
        make_pod_target("A", resources=[path], requires_frameworks=True)
    """

    def _make(
        name: str,
        resources: list[Path] = [],
        resource_bundles: dict[str, list[Path]] = {},
        vendored_dynamic_artifacts: list[Path] = [],
        license: str | None = None,
        **kwargs,
    ) -> PodTarget:
        accessor = FileAccessor(
            spec_name=name,
            resources=resources,
            resource_bundles=resource_bundles,
            vendored_dynamic_artifacts=vendored_dynamic_artifacts,
            license=license,
        )
        kwargs.setdefault("platform", ios)
        return PodTarget(name=name, file_accessors=[accessor], **kwargs)

    return _make


@pytest.fixture
def make_aggregate_target(ios: Platform, sandbox_root: Path) -> Callable[..., AggregateTarget]:
    """Build an aggregate target with Debug and Release configurations."""

    def _make(name: str = "Pods-App", **kwargs) -> AggregateTarget:
        kwargs.setdefault("platform", ios)
        kwargs.setdefault("sandbox_root", sandbox_root)
        kwargs.setdefault(
            "user_build_configurations", {"Debug": "debug", "Release": "release"}
        )
        return AggregateTarget(name=name, **kwargs)

    return _make


@pytest.fixture
def fake_gen_bridge_metadata(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Replace the bridge metadata tool, records every invocation."""
    calls: list[list[str]] = []

    def _check_call(args: list[str]) -> int:
        calls.append(list(args))
        output = Path(args[args.index("-o") + 1])
        output.write_text("<signatures/>\n", encoding="utf-8")
        return 0

    monkeypatch.setattr("podsmith.generators.bridge_support.subprocess.check_call", _check_call)
    return calls
