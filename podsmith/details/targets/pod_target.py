from typing import List

from podsmith.details.targets.file_accessor import FileAccessor
from podsmith.details.targets.target import Target

CONFIGURATION_BUILD_DIR_VARIABLE = "${PODS_CONFIGURATION_BUILD_DIR}"
BUILT_PRODUCTS_DIR_VARIABLE = "$BUILT_PRODUCTS_DIR"


# Library target built from one pod, possibly shared by several aggregate targets
class PodTarget(Target):
    def __init__(
        self,
        *,
        should_build: bool = True,
        requires_frameworks: bool = False,
        dependencies: List[str] = [],
        file_accessors: List[FileAccessor] = [],
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.should_build = should_build
        self.requires_frameworks = requires_frameworks
        self.dependencies = list(dependencies) or [self.name]
        self.file_accessors = list(file_accessors)

    @property
    def pod_name(self) -> str:
        return self.dependencies[0].split("/")[0]

    @property
    def product_name(self) -> str:
        if self.requires_frameworks:
            return f"{self.product_module_name}.framework"
        return f"lib{self.label}.a"

    def configuration_build_dir(self, dir: str = CONFIGURATION_BUILD_DIR_VARIABLE) -> str:
        return f"{dir}/{self.label}"

    def build_product_path(self, dir: str = BUILT_PRODUCTS_DIR_VARIABLE) -> str:
        return f"{self.configuration_build_dir(dir)}/{self.product_name}"
