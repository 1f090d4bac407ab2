# Installation pass for one aggregate target.
#
# The pass adds the target to the Pods project and generates its support
# files. Which steps run is decided once, up front, from the target's flags
# (see INSTALL_STEPS); the steps then run strictly in order, sharing an
# InstallationState accumulator. Any exception aborts the pass.

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from podsmith import Config
from podsmith.details.aggregation import frameworks_by_config, resources_by_config
from podsmith.details.build_settings import aggregate_build_settings
from podsmith.details.paths import relative_path
from podsmith.details.resolver import ConfigurationResolver
from podsmith.details.targets.aggregate_target import AggregateTarget
from podsmith.errors import GeneratorWriteFailure
from podsmith.generators.acknowledgements import Acknowledgements
from podsmith.generators.bridge_support import BridgeSupport
from podsmith.generators.copy_resources_script import CopyResourcesScript
from podsmith.generators.dummy_source import DummySource
from podsmith.generators.embed_frameworks_script import EmbedFrameworksScript
from podsmith.generators.framework_files import InfoPlist, ModuleMap, UmbrellaHeader
from podsmith.generators.xcconfig import AggregateXCConfig
from podsmith.generators.xcode.model import PBXFileReference, PBXGroup, ProductType
from podsmith.generators.xcode.project import NativeTarget, PodsProject

logger = logging.getLogger(__name__)


def _always(target: AggregateTarget) -> bool:
    return True


def _requires_frameworks(target: AggregateTarget) -> bool:
    return target.requires_frameworks


# App extensions and watch apps get their frameworks from the host target
def _is_top_level_product(target: AggregateTarget) -> bool:
    return not target.requires_host_target


# Bridge support must come before the copy resources script, its metadata
# file is one of the resources.
INSTALL_STEPS: Tuple[Tuple[str, Callable[[AggregateTarget], bool]], ...] = (
    ("add_target", _always),
    ("create_support_files_dir", _always),
    ("create_support_files_group", _always),
    ("create_xcconfig_file", _always),
    ("create_info_plist_file", _requires_frameworks),
    ("create_module_map", _requires_frameworks),
    ("create_umbrella_header", _requires_frameworks),
    ("create_embed_frameworks_script", _is_top_level_product),
    ("create_bridge_support_file", _always),
    ("create_copy_resources_script", _always),
    ("create_acknowledgements", _always),
    ("create_dummy_source", _always),
)


def plan_steps(target: AggregateTarget) -> List[str]:
    return [name for name, applies in INSTALL_STEPS if applies(target)]


@dataclass
class InstallationState:
    target: AggregateTarget
    resolver: ConfigurationResolver
    steps: List[str]
    completed: List[str] = field(default_factory=list)
    native_target: Optional[NativeTarget] = None
    support_files_group: Optional[PBXGroup] = None
    bridge_support_file: Optional[str] = None
    artifacts: List[Path] = field(default_factory=list)


class AggregateTargetInstaller:
    def __init__(self, project: PodsProject, config: Config):
        self.project = project
        self.config = config

    def install(self, target: AggregateTarget) -> InstallationState:
        state = InstallationState(
            target=target,
            resolver=ConfigurationResolver(target.target_definition),
            steps=plan_steps(target),
        )
        logger.info("- Installing target `%s` %s", target.name, target.platform)
        for step in state.steps:
            logger.debug("  %s: %s", target.name, step)
            getattr(self, step)(state)
            state.completed.append(step)
        return state

    def add_file_to_support_group(self, state: InstallationState, path: Path) -> PBXFileReference:
        assert state.support_files_group is not None
        state.artifacts.append(path)
        return self.project.new_file(path, state.support_files_group)

    def add_target(self, state: InstallationState):
        target = state.target
        product_type = ProductType.FRAMEWORK if target.requires_frameworks else ProductType.STATIC_LIBRARY
        settings = {
            config: aggregate_build_settings(target, config, self.config.bundle_identifier_prefix)
            for config in target.user_build_configurations
        }
        state.native_target = self.project.new_target(
            target.label, target.product_name, product_type, settings
        )

    def create_support_files_dir(self, state: InstallationState):
        path = state.target.support_files_dir
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GeneratorWriteFailure(path, e.strerror or str(e)) from e

    def create_support_files_group(self, state: InstallationState):
        target = state.target
        state.support_files_group = self.project.new_group(
            target.name, target.support_files_dir, self.project.support_files_group
        )

    def create_xcconfig_file(self, state: InstallationState):
        target = state.target
        assert state.native_target is not None
        for config in target.user_build_configurations:
            path = target.xcconfig_path(config)
            generator = AggregateXCConfig(target, config, state.resolver)
            generator.save_as(path)
            target.xcconfigs[config] = generator.xcconfig
            file_ref = self.add_file_to_support_group(state, path)
            state.native_target.build_configuration(config).baseConfigurationReference = file_ref.ref(file_ref.name)

    def create_info_plist_file(self, state: InstallationState):
        path = state.target.info_plist_path
        InfoPlist(state.target).save_as(path)
        self.add_file_to_support_group(state, path)
        self._set_build_setting(state, "INFOPLIST_FILE", path)

    def create_module_map(self, state: InstallationState):
        path = state.target.module_map_path
        ModuleMap(state.target).save_as(path)
        self.add_file_to_support_group(state, path)
        self._set_build_setting(state, "MODULEMAP_FILE", path)

    def create_umbrella_header(self, state: InstallationState):
        assert state.native_target is not None
        path = state.target.umbrella_header_path
        UmbrellaHeader(state.target).save_as(path)
        file_ref = self.add_file_to_support_group(state, path)
        self.project.add_build_file(
            state.native_target.headers_build_phase, file_ref, {"ATTRIBUTES": ["Public"]}
        )

    def create_embed_frameworks_script(self, state: InstallationState):
        target = state.target
        path = target.embed_frameworks_script_path
        frameworks = frameworks_by_config(target, state.resolver, target.sandbox_root)
        EmbedFrameworksScript(frameworks).save_as(path)
        self.add_file_to_support_group(state, path)

    def create_bridge_support_file(self, state: InstallationState):
        if not self.config.generate_bridge_support:
            return
        assert state.native_target is not None
        target = state.target
        path = target.bridge_support_path
        headers = [
            self.project.project_dir.joinpath(p)
            for p in self.project.build_file_paths(state.native_target.headers_build_phase)
        ]
        BridgeSupport(headers).save_as(path)
        self.add_file_to_support_group(state, path)
        state.bridge_support_file = relative_path(path, target.sandbox_root, target.name)

    def create_copy_resources_script(self, state: InstallationState):
        target = state.target
        path = target.copy_resources_script_path
        resources = resources_by_config(
            target, state.resolver, self.project.project_dir, state.bridge_support_file
        )
        CopyResourcesScript(resources, target.platform).save_as(path)
        self.add_file_to_support_group(state, path)

    def create_acknowledgements(self, state: InstallationState):
        basepath = state.target.acknowledgements_basepath
        file_accessors = state.target.file_accessors
        for generator_class in Acknowledgements.generators():
            path = generator_class.path_from_basepath(basepath)
            generator_class(file_accessors).save_as(path)
            self.add_file_to_support_group(state, path)

    def create_dummy_source(self, state: InstallationState):
        assert state.native_target is not None
        path = state.target.dummy_source_path
        DummySource(state.target).save_as(path)
        file_ref = self.add_file_to_support_group(state, path)
        self.project.add_build_file(state.native_target.source_build_phase, file_ref)

    def _set_build_setting(self, state: InstallationState, key: str, path: Path):
        assert state.native_target is not None
        value = relative_path(path, state.target.sandbox_root, state.target.name)
        for configuration in state.native_target.build_configurations:
            configuration.buildSettings[key] = value
