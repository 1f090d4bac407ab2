# In-memory Pods project.
#
# Owns the object graph of the Pods.xcodeproj the installers add their
# targets and support files to. Mutations are serialized with a lock so the
# passes of several aggregate targets may run on worker threads.

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Type

from podsmith.details.paths import relative_path
from podsmith.generators.base import write_if_changed
from podsmith.generators.xcode.formatter import format_xcode_project
from podsmith.generators.xcode.model import (
    BuildPhase,
    FileType,
    PBXBuildFile,
    PBXFileReference,
    PBXFrameworksBuildPhase,
    PBXGroup,
    PBXHeadersBuildPhase,
    PBXNativeTarget,
    PBXProject,
    PBXSourcesBuildPhase,
    ProductType,
    SourceTree,
    XCBuildConfiguration,
    XCConfigurationList,
    XcodeObject,
    XcodeProject,
)

logger = logging.getLogger(__name__)

PROJECT_OWNER = "PROJECT"


class NativeTarget:
    """Handle on a native target and the objects that belong to it."""

    def __init__(
        self,
        target: PBXNativeTarget,
        build_configurations: List[XCBuildConfiguration],
        phases: Dict[Type[BuildPhase], BuildPhase],
    ):
        self.target = target
        self.build_configurations = build_configurations
        self.phases = phases

    @property
    def name(self) -> str:
        return self.target.name

    def build_configuration(self, name: str) -> XCBuildConfiguration:
        for configuration in self.build_configurations:
            if configuration.name == name:
                return configuration
        raise KeyError(name)

    @property
    def headers_build_phase(self) -> BuildPhase:
        return self.phases[PBXHeadersBuildPhase]

    @property
    def source_build_phase(self) -> BuildPhase:
        return self.phases[PBXSourcesBuildPhase]


class PodsProject:
    def __init__(self, path: Path, build_configurations: Dict[str, str] = {}):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._objects: Dict[str, XcodeObject] = {}
        self.main_group = self._add(PBXGroup(name="", sourceTree=SourceTree.GROUP))
        self.products_group = self._add(PBXGroup(name="Products", sourceTree=SourceTree.GROUP))
        self.support_files_group = self._add(
            PBXGroup(name="Targets Support Files", sourceTree=SourceTree.GROUP)
        )
        self.main_group.children.append(self.support_files_group.ref("Targets Support Files"))
        self.main_group.children.append(self.products_group.ref("Products"))
        project_configs = [
            self._add(XCBuildConfiguration(name=name, buildSettings={}, owner=PROJECT_OWNER))
            for name in build_configurations
        ]
        config_list = self._add(
            XCConfigurationList(
                buildConfigurations=[c.ref(c.name) for c in project_configs],
                owner=PROJECT_OWNER,
            )
        )
        self.project = self._add(
            PBXProject(
                name=self.path.stem,
                buildConfigurationList=config_list.ref(),
                mainGroup=self.main_group.ref(),
                productRefGroup=self.products_group.ref("Products"),
            )
        )

    @property
    def project_dir(self) -> Path:
        return self.path.parent

    def _add(self, obj):
        return self._objects.setdefault(obj.id, obj)

    def _add_child(self, children: list, obj, comment: Optional[str] = None):
        existing = self._objects.get(obj.id)
        if existing is not None:
            return existing
        self._objects[obj.id] = obj
        children.append(obj.ref(comment))
        return obj

    def new_group(self, name: str, path: Path, parent: PBXGroup) -> PBXGroup:
        relative = relative_path(path, self.project_dir, name)
        with self._lock:
            return self._add_child(
                parent.children,
                PBXGroup(name=name, sourceTree=SourceTree.SOURCE_ROOT, path=relative),
                name,
            )

    def new_file(self, path: Path, group: PBXGroup) -> PBXFileReference:
        relative = relative_path(path, self.project_dir, group.name)
        with self._lock:
            return self._add_child(
                group.children,
                PBXFileReference(
                    name=Path(path).name,
                    path=relative,
                    sourceTree=SourceTree.SOURCE_ROOT,
                    lastKnownFileType=FileType.from_extension(Path(path).suffix),
                    includeInIndex=1,
                ),
                Path(path).name,
            )

    def new_target(
        self,
        name: str,
        product_name: str,
        product_type: ProductType,
        build_settings: Dict[str, Dict[str, str]],
    ) -> NativeTarget:
        with self._lock:
            product_ref = self._add_child(
                self.products_group.children,
                PBXFileReference(
                    name=product_name,
                    path=product_name,
                    sourceTree=SourceTree.BUILT_PRODUCTS_DIR,
                    lastKnownFileType=FileType.from_extension(Path(product_name).suffix),
                    includeInIndex=0,
                ),
                product_name,
            )
            configurations = []
            for config, settings in build_settings.items():
                configuration = self._add(
                    XCBuildConfiguration(name=config, buildSettings={}, owner=name)
                )
                configuration.buildSettings = dict(settings)
                configurations.append(configuration)
            config_list = self._add(
                XCConfigurationList(
                    buildConfigurations=[c.ref(c.name) for c in configurations],
                    owner=name,
                    defaultConfigurationName=(
                        configurations[-1].name
                        if configurations and "Release" not in build_settings
                        else "Release"
                    ),
                )
            )
            phases: Dict[Type[BuildPhase], BuildPhase] = {
                phase_type: self._add(phase_type(target_name=name))
                for phase_type in (PBXHeadersBuildPhase, PBXSourcesBuildPhase, PBXFrameworksBuildPhase)
            }
            target = self._add_child(
                self.project.targets,
                PBXNativeTarget(
                    name=name,
                    buildConfigurationList=config_list.ref(),
                    buildPhases=[p.ref() for p in phases.values()],
                    productName=Path(product_name).stem,
                    productReference=product_ref.ref(product_name),
                    productType=product_type,
                ),
                name,
            )
        logger.debug("added target %s to %s", name, self.path.name)
        return NativeTarget(target, configurations, phases)

    def add_build_file(
        self,
        phase: BuildPhase,
        file_ref: PBXFileReference,
        settings: Optional[Dict[str, List[str]]] = None,
    ) -> PBXBuildFile:
        with self._lock:
            return self._add_child(
                phase.files,
                PBXBuildFile(
                    fileRef=file_ref.ref(file_ref.name),
                    target_name=phase.target_name,
                    settings=settings,
                ),
                file_ref.name,
            )

    def build_file_paths(self, phase: BuildPhase) -> List[str]:
        paths = []
        for build_file_ref in phase.files:
            build_file = self._objects[build_file_ref.id]
            paths.append(self._objects[build_file.fileRef.id].path)
        return paths

    def to_model(self) -> XcodeProject:
        with self._lock:
            return XcodeProject(project=self.project, objects=list(self._objects.values()))

    def save(self) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        write_if_changed(self.path.joinpath("project.pbxproj"), format_xcode_project(self.to_model()))
