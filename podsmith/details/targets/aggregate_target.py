from pathlib import Path
from typing import Dict, List, Optional

from podsmith.details.targets.pod_target import PodTarget
from podsmith.details.targets.target import Target
from podsmith.details.targets.target_definition import TargetDefinition

SUPPORT_FILES_DIR_NAME = "Target Support Files"


# Target that links every pod a user target depends on, e.g. `Pods-App`
class AggregateTarget(Target):
    def __init__(
        self,
        *,
        sandbox_root: Path,
        user_build_configurations: Dict[str, str],
        pod_targets: List[PodTarget] = [],
        target_definition: Optional[TargetDefinition] = None,
        requires_frameworks: bool = False,
        requires_host_target: bool = False,
        **kwargs,
    ):
        super().__init__(**kwargs)
        lowered = [name.lower() for name in user_build_configurations]
        if len(set(lowered)) != len(lowered):
            raise ValueError(
                f"duplicate build configuration names in target='{self.name}'"
            )
        names = [t.name for t in pod_targets]
        for name in names:
            if names.count(name) > 1:
                raise ValueError(
                    f"pod target with name='{name}' listed twice in target='{self.name}'"
                )
        self.sandbox_root = Path(sandbox_root)
        self.user_build_configurations = dict(user_build_configurations)
        self.pod_targets = list(pod_targets)
        self.target_definition = target_definition or TargetDefinition(self.name)
        self.requires_frameworks = requires_frameworks
        self.requires_host_target = requires_host_target
        # configuration name -> settings parsed from the generated xcconfig
        self.xcconfigs: Dict[str, Dict[str, str]] = {}

    @property
    def support_files_dir(self) -> Path:
        return self.sandbox_root.joinpath(SUPPORT_FILES_DIR_NAME, self.label)

    def xcconfig_path(self, configuration_name: str) -> Path:
        return self.support_files_dir.joinpath(
            f"{self.label}.{configuration_name.lower()}.xcconfig"
        )

    @property
    def copy_resources_script_path(self) -> Path:
        return self.support_files_dir.joinpath(f"{self.label}-resources.sh")

    @property
    def embed_frameworks_script_path(self) -> Path:
        return self.support_files_dir.joinpath(f"{self.label}-frameworks.sh")

    @property
    def bridge_support_path(self) -> Path:
        return self.support_files_dir.joinpath(f"{self.label}.bridgesupport")

    @property
    def acknowledgements_basepath(self) -> Path:
        return self.support_files_dir.joinpath(f"{self.label}-acknowledgements")

    @property
    def info_plist_path(self) -> Path:
        return self.support_files_dir.joinpath("Info.plist")

    @property
    def module_map_path(self) -> Path:
        return self.support_files_dir.joinpath(f"{self.label}.modulemap")

    @property
    def umbrella_header_path(self) -> Path:
        return self.support_files_dir.joinpath(f"{self.label}-umbrella.h")

    @property
    def dummy_source_path(self) -> Path:
        return self.support_files_dir.joinpath(f"{self.label}-dummy.m")

    @property
    def product_name(self) -> str:
        if self.requires_frameworks:
            return f"{self.product_module_name}.framework"
        return f"lib{self.label}.a"

    @property
    def file_accessors(self):
        return [fa for pod_target in self.pod_targets for fa in pod_target.file_accessors]
