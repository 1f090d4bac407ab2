"""End to end installation passes against a temporary sandbox."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import pytest

from podsmith import Config, GeneratorWriteFailure, InvalidArtifactPath
from podsmith.__main__ import main
from podsmith.details.installer import AggregateTargetInstaller
from podsmith.details.targets.target_definition import TargetDefinition
from podsmith.details.tools.install import check_support_files_dirs, install_targets
from podsmith.details.workspace import Workspace
from podsmith.generators.xcode import PodsProject


@pytest.fixture
def project(config: Config) -> PodsProject:
    return PodsProject(config.project_path, {"Debug": "debug", "Release": "release"})


@pytest.fixture
def framework_target(make_pod_target, make_aggregate_target, sandbox_root: Path):
    a = make_pod_target(
        "A",
        should_build=False,
        resources=[sandbox_root / "A/a.png"],
        license="MIT",
    )
    b = make_pod_target("B", requires_frameworks=True, license="BSD")
    return make_aggregate_target(
        pod_targets=[a, b],
        requires_frameworks=True,
        target_definition=TargetDefinition("App"),
    )


class TestAggregateTargetInstaller:
    def test_framework_target(self, project, config, framework_target, caplog) -> None:
        support = framework_target.support_files_dir
        with caplog.at_level(logging.INFO, logger="podsmith"):
            state = AggregateTargetInstaller(project, config).install(framework_target)
        assert state.completed == state.steps
        assert "- Installing target `Pods-App` iOS 9.0" in caplog.text
        assert sorted(p.name for p in support.iterdir()) == [
            "Info.plist",
            "Pods-App-acknowledgements.markdown",
            "Pods-App-acknowledgements.plist",
            "Pods-App-dummy.m",
            "Pods-App-frameworks.sh",
            "Pods-App-resources.sh",
            "Pods-App-umbrella.h",
            "Pods-App.debug.xcconfig",
            "Pods-App.modulemap",
            "Pods-App.release.xcconfig",
        ]
        assert sorted(state.artifacts) == sorted(support.iterdir())

        frameworks = (support / "Pods-App-frameworks.sh").read_text()
        assert 'install_framework "$BUILT_PRODUCTS_DIR/B/B.framework"' in frameworks
        assert os.access(support / "Pods-App-frameworks.sh", os.X_OK)
        resources = (support / "Pods-App-resources.sh").read_text()
        assert 'install_resource "A/a.png"' in resources

        native = state.native_target
        debug = native.build_configuration("Debug")
        assert debug.baseConfigurationReference.id == project.new_file(
            framework_target.xcconfig_path("Debug"), state.support_files_group
        ).id
        assert debug.buildSettings["MODULEMAP_FILE"] == (
            "Target Support Files/Pods-App/Pods-App.modulemap"
        )
        assert debug.buildSettings["INFOPLIST_FILE"] == "Target Support Files/Pods-App/Info.plist"
        assert project.build_file_paths(native.headers_build_phase) == [
            "Target Support Files/Pods-App/Pods-App-umbrella.h"
        ]
        assert project.build_file_paths(native.source_build_phase) == [
            "Target Support Files/Pods-App/Pods-App-dummy.m"
        ]
        assert framework_target.xcconfigs["Release"]["OTHER_LDFLAGS"] == (
            '$(inherited) -framework "B"'
        )

    def test_host_target_has_no_embed_script(self, project, config, make_aggregate_target) -> None:
        target = make_aggregate_target("Pods-Widget", requires_host_target=True)
        AggregateTargetInstaller(project, config).install(target)
        assert not target.embed_frameworks_script_path.exists()
        assert target.copy_resources_script_path.exists()
        assert not target.info_plist_path.exists()

    def test_bridge_support(
        self, project, sandbox_root, framework_target, fake_gen_bridge_metadata
    ) -> None:
        config = Config(sandbox_root, generate_bridge_support=True)
        state = AggregateTargetInstaller(project, config).install(framework_target)
        bridge = "Target Support Files/Pods-App/Pods-App.bridgesupport"
        assert state.bridge_support_file == bridge
        (args,) = fake_gen_bridge_metadata
        assert args[-1] == str(framework_target.umbrella_header_path)
        resources = framework_target.copy_resources_script_path.read_text()
        assert resources.count(f'install_resource "{bridge}"') == 2

    def test_bridge_support_disabled(self, project, config, framework_target, fake_gen_bridge_metadata) -> None:
        state = AggregateTargetInstaller(project, config).install(framework_target)
        assert state.bridge_support_file is None
        assert fake_gen_bridge_metadata == []

    def test_reinstall_is_idempotent(self, project, config, framework_target) -> None:
        installer = AggregateTargetInstaller(project, config)
        installer.install(framework_target)
        project.save()
        pbxproj = config.project_path / "project.pbxproj"
        before = {p: p.read_bytes() for p in framework_target.support_files_dir.iterdir()}
        before[pbxproj] = pbxproj.read_bytes()
        installer.install(framework_target)
        project.save()
        after = {p: p.read_bytes() for p in framework_target.support_files_dir.iterdir()}
        after[pbxproj] = pbxproj.read_bytes()
        assert before == after

    def test_failure_aborts_pass(self, project, config, framework_target, monkeypatch) -> None:
        def _fail(self, state):
            raise GeneratorWriteFailure("x", "disk full")

        monkeypatch.setattr(AggregateTargetInstaller, "create_module_map", _fail)
        with pytest.raises(GeneratorWriteFailure):
            AggregateTargetInstaller(project, config).install(framework_target)
        assert not framework_target.umbrella_header_path.exists()
        assert framework_target.info_plist_path.exists()

    def test_invalid_vendored_artifact_names_pod(
        self, project, config, make_pod_target, make_aggregate_target
    ) -> None:
        pod = make_pod_target("Vendored", vendored_dynamic_artifacts=[Path("v.framework")])
        target = make_aggregate_target(pod_targets=[pod], requires_frameworks=True)
        with pytest.raises(InvalidArtifactPath) as excinfo:
            AggregateTargetInstaller(project, config).install(target)
        assert excinfo.value.owner == "Vendored"
        assert excinfo.value.path == "v.framework"


def write_manifest(tmp_path: Path, **config) -> Path:
    manifest = {
        "config": {"sandbox_root": "Pods", **config},
        "pod_targets": [
            {
                "name": "A",
                "platform": {"name": "ios", "deployment_target": "9.0"},
                "requires_frameworks": True,
            }
        ],
        "aggregate_targets": [
            {
                "name": name,
                "platform": {"name": "ios", "deployment_target": "9.0"},
                "user_build_configurations": {"Debug": "debug", "Release": "release"},
                "pod_targets": ["A"],
                "requires_frameworks": True,
            }
            for name in ("Pods-App", "Pods-AppTests", "Pods-Other")
        ],
    }
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(manifest), encoding="utf-8")
    return path


class TestInstallTargets:
    def test_parallel_install(self, tmp_path: Path) -> None:
        workspace = Workspace.load(write_manifest(tmp_path))
        states = install_targets(workspace, workspace.select([]), jobs=3)
        assert [s.target.name for s in states] == ["Pods-App", "Pods-AppTests", "Pods-Other"]
        text = (workspace.config.project_path / "project.pbxproj").read_text()
        for name in ("Pods-App", "Pods-AppTests", "Pods-Other"):
            assert f"/* {name} */ = {{" in text

    def test_colliding_support_dirs(self, make_aggregate_target) -> None:
        with pytest.raises(ValueError, match="support files directory"):
            check_support_files_dirs([make_aggregate_target(), make_aggregate_target()])


class TestCommandLine:
    def test_plan_writes_nothing(self, tmp_path: Path, monkeypatch, capsys) -> None:
        manifest = write_manifest(tmp_path)
        monkeypatch.setattr(sys, "argv", ["podsmith", "plan", "Pods-App", "--manifest", str(manifest)])
        main()
        out = capsys.readouterr().out
        assert out.startswith("Pods-App (iOS 9.0)\n")
        assert "    create_module_map\n" in out
        assert "      $BUILT_PRODUCTS_DIR/A/A.framework\n" in out
        assert "Pods-Other" not in out
        assert not (tmp_path / "Pods").exists()

    def test_plan_lists_bridge_support(self, tmp_path: Path, monkeypatch, capsys) -> None:
        manifest = write_manifest(tmp_path, generate_bridge_support=True)
        monkeypatch.setattr(sys, "argv", ["podsmith", "plan", "Pods-App", "--manifest", str(manifest)])
        main()
        out = capsys.readouterr().out
        bridge = "      Target Support Files/Pods-App/Pods-App.bridgesupport\n"
        resources = out.split("  resources:\n")[1].split("  frameworks:\n")[0]
        assert resources == f"    Debug:\n{bridge}    Release:\n{bridge}"
        assert not (tmp_path / "Pods").exists()

    def test_install(self, tmp_path: Path, monkeypatch, capsys) -> None:
        manifest = write_manifest(tmp_path)
        monkeypatch.setattr(
            sys, "argv", ["podsmith", "install", "--manifest", str(manifest), "--jobs=2"]
        )
        main()
        assert (tmp_path / "Pods/Pods.xcodeproj/project.pbxproj").exists()
        assert "Pods-Other: 10 support files" in capsys.readouterr().out

    def test_errors_exit_non_zero(self, tmp_path: Path, monkeypatch, capsys) -> None:
        manifest = write_manifest(tmp_path)
        monkeypatch.setattr(sys, "argv", ["podsmith", "plan", "Nope", "--manifest", str(manifest)])
        with pytest.raises(SystemExit) as excinfo:
            main()
        assert excinfo.value.code == 1
        assert "unknown aggregate targets: Nope" in capsys.readouterr().err
