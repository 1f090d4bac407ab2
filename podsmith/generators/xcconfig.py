import os
from pathlib import Path
from typing import Dict, List

from podsmith.details.as_iterator import unique
from podsmith.details.paths import pods_root_path
from podsmith.details.resolver import ConfigurationResolver
from podsmith.details.targets.aggregate_target import AggregateTarget
from podsmith.generators.base import Generator

INHERITED = "$(inherited)"

RUNPATH_SEARCH_PATHS = {
    "osx": ["'@executable_path/../Frameworks'", "'@loader_path/Frameworks'"],
}
DEFAULT_RUNPATH_SEARCH_PATHS = ["'@executable_path/Frameworks'", "'@loader_path/Frameworks'"]


def quoted(values: List[str]) -> List[str]:
    return [f'"{v}"' for v in values]


class AggregateXCConfig(Generator):
    """Build settings the user target includes for one build configuration.

    Only pod targets that take part in the configuration contribute search
    paths and linker flags. `xcconfig` holds the settings as a mapping; the
    installer keeps it on the aggregate target for later consumers.
    """

    def __init__(self, target: AggregateTarget, configuration_name: str, resolver: ConfigurationResolver):
        self.target = target
        self.configuration_name = configuration_name
        self.resolver = resolver

    @property
    def xcconfig(self) -> Dict[str, str]:
        target = self.target
        pod_targets = [
            pod_target
            for pod_target in target.pod_targets
            if self.resolver.includes(pod_target, self.configuration_name)
        ]
        built = [pod_target for pod_target in pod_targets if pod_target.should_build]
        owned_artifacts = [
            (pod_target, Path(artifact))
            for pod_target in pod_targets
            for accessor in pod_target.file_accessors
            for artifact in accessor.vendored_dynamic_artifacts
        ]
        vendored = [artifact for _, artifact in owned_artifacts]
        framework_dirs = unique(
            os.path.dirname(pods_root_path(artifact, target.sandbox_root, pod_target.name))
            for pod_target, artifact in owned_artifacts
            if artifact.suffix == ".framework"
        )

        settings: Dict[str, str] = {
            "GCC_PREPROCESSOR_DEFINITIONS": f"{INHERITED} COCOAPODS=1",
            "PODS_BUILD_DIR": "$BUILD_DIR",
            "PODS_CONFIGURATION_BUILD_DIR": "$PODS_BUILD_DIR/$(CONFIGURATION)$(EFFECTIVE_PLATFORM_NAME)",
            "PODS_ROOT": f"${{SRCROOT}}/{target.sandbox_root.name}",
        }
        ldflags = [INHERITED]
        if target.requires_frameworks:
            framework_dirs = unique(
                [pod_target.configuration_build_dir() for pod_target in built] + framework_dirs
            )
            ldflags += [f'-framework "{p.product_module_name}"' for p in built]
        else:
            library_dirs = [pod_target.configuration_build_dir() for pod_target in built]
            if library_dirs:
                settings["LIBRARY_SEARCH_PATHS"] = " ".join([INHERITED] + quoted(library_dirs))
            ldflags += ["-ObjC"] + [f'-l"{p.label}"' for p in built]
        ldflags += [f'-framework "{a.stem}"' for a in vendored if a.suffix == ".framework"]
        ldflags += [f'-l"{a.stem[3:]}"' for a in vendored if a.suffix == ".dylib" and a.stem.startswith("lib")]
        if framework_dirs:
            settings["FRAMEWORK_SEARCH_PATHS"] = " ".join([INHERITED] + quoted(framework_dirs))
        if target.requires_frameworks or vendored:
            runpaths = RUNPATH_SEARCH_PATHS.get(target.platform.name, DEFAULT_RUNPATH_SEARCH_PATHS)
            settings["LD_RUNPATH_SEARCH_PATHS"] = " ".join([INHERITED] + runpaths)
        if len(ldflags) > 1:
            settings["OTHER_LDFLAGS"] = " ".join(ldflags)
        return settings

    def generate(self) -> str:
        return "".join(f"{key} = {value}\n" for key, value in sorted(self.xcconfig.items()))
