"""Unit tests for the Pods project model."""

from __future__ import annotations

from pathlib import Path

import pytest

from podsmith.generators.xcode import PodsProject
from podsmith.generators.xcode.formatter import format_xcode_project, quote
from podsmith.generators.xcode.model import PBXFileReference, ProductType, SourceTree, generate_id

ROOT = Path("/work/Pods")


@pytest.fixture
def project() -> PodsProject:
    return PodsProject(ROOT / "Pods.xcodeproj", {"Debug": "debug", "Release": "release"})


def add_target(project: PodsProject, name: str = "Pods-App"):
    return project.new_target(
        name,
        f"lib{name}.a",
        ProductType.STATIC_LIBRARY,
        {"Debug": {"A": "1"}, "Release": {"A": "2"}},
    )


class TestModel:
    def test_ids_are_stable(self) -> None:
        assert generate_id("key") == generate_id("key")
        assert len(generate_id("key")) == 24

    def test_file_reference_id_depends_on_path(self) -> None:
        a = PBXFileReference(name="a", path="x/a", sourceTree=SourceTree.SOURCE_ROOT)
        b = PBXFileReference(name="a", path="y/a", sourceTree=SourceTree.SOURCE_ROOT)
        assert a.id != b.id


class TestPodsProject:
    def test_new_target(self, project: PodsProject) -> None:
        target = add_target(project)
        assert target.name == "Pods-App"
        assert target.build_configuration("Release").buildSettings == {"A": "2"}
        with pytest.raises(KeyError):
            target.build_configuration("Staging")

    def test_new_file_is_relative_to_project_dir(self, project: PodsProject) -> None:
        group = project.new_group(
            "Pods-App", ROOT / "Target Support Files/Pods-App", project.support_files_group
        )
        file_ref = project.new_file(ROOT / "Target Support Files/Pods-App/Pods-App-dummy.m", group)
        assert file_ref.path == "Target Support Files/Pods-App/Pods-App-dummy.m"
        assert file_ref.lastKnownFileType.value == "sourcecode.c.objc"
        assert group.path == "Target Support Files/Pods-App"

    def test_mutations_are_idempotent(self, project: PodsProject) -> None:
        target = add_target(project)
        group = project.new_group("G", ROOT / "G", project.support_files_group)
        for _ in range(2):
            add_target(project)
            project.new_group("G", ROOT / "G", project.support_files_group)
            file_ref = project.new_file(ROOT / "G/a.h", group)
            project.add_build_file(target.headers_build_phase, file_ref, {"ATTRIBUTES": ["Public"]})
        assert len(project.project.targets) == 1
        assert len(project.support_files_group.children) == 1
        assert len(group.children) == 1
        assert project.build_file_paths(target.headers_build_phase) == ["G/a.h"]

    def test_save_writes_pbxproj(self, tmp_path: Path) -> None:
        project = PodsProject(tmp_path / "Pods.xcodeproj", {"Debug": "debug"})
        add_target(project)
        project.save()
        text = (tmp_path / "Pods.xcodeproj" / "project.pbxproj").read_text()
        assert text.startswith("// !$*UTF8*$!\n{\n")
        assert "/* Begin PBXNativeTarget section */" in text
        assert "com.apple.product-type.library.static" in text
        assert "target_name" not in text
        assert "owner" not in text


class TestFormatter:
    def test_quote(self) -> None:
        assert quote("Pods-App") == '"Pods-App"'
        assert quote("$(inherited)") == '"$(inherited)"'
        assert quote("Pods_App") == "Pods_App"
        assert quote("") == '""'

    def test_output_is_deterministic(self, project: PodsProject) -> None:
        add_target(project, "B")
        add_target(project, "A")
        first = format_xcode_project(project.to_model())
        assert first == format_xcode_project(project.to_model())
        assert first.endswith("}\n")
