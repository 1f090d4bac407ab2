# Per build configuration artifact lists for an aggregate target.
#
# Both functions are pure: they only read the aggregate target, its pod
# targets and their file accessors, and return a fresh mapping with one entry
# per user build configuration, in declaration order.

from pathlib import Path
from typing import Dict, List, Optional

from podsmith.details.as_iterator import unique
from podsmith.details.paths import pods_root_path, relative_path, shellescape
from podsmith.details.resolver import ConfigurationResolver, library_candidates
from podsmith.details.targets.aggregate_target import AggregateTarget
from podsmith.details.targets.pod_target import BUILT_PRODUCTS_DIR_VARIABLE, PodTarget

ConfigurationArtifactMap = Dict[str, List[str]]


def _pod_target_resources(pod_target: PodTarget, project_dir: Path) -> List[str]:
    resource_paths = [
        relative_path(resource, project_dir, pod_target.name)
        for accessor in pod_target.file_accessors
        for resource in accessor.resources
    ]
    resource_bundles = [
        f"{pod_target.configuration_build_dir()}/{shellescape(name)}.bundle"
        for accessor in pod_target.file_accessors
        for name in accessor.resource_bundles
    ]
    return resource_paths + resource_bundles


def resources_by_config(
    target: AggregateTarget,
    resolver: ConfigurationResolver,
    project_dir: Path,
    bridge_support_file: Optional[str] = None,
) -> ConfigurationArtifactMap:
    candidates = library_candidates(target.pod_targets)
    result: ConfigurationArtifactMap = {}
    for config in target.user_build_configurations:
        resources = [
            path
            for pod_target in candidates
            if resolver.includes(pod_target, config)
            for path in _pod_target_resources(pod_target, project_dir)
        ]
        if bridge_support_file:
            resources.append(bridge_support_file)
        result[config] = unique(resources)
    return result


def _pod_target_frameworks(pod_target: PodTarget, sandbox_root: Path) -> List[str]:
    frameworks = [
        pods_root_path(artifact, sandbox_root, pod_target.name)
        for accessor in pod_target.file_accessors
        for artifact in accessor.vendored_dynamic_artifacts
    ]
    if pod_target.should_build and pod_target.requires_frameworks:
        frameworks.append(pod_target.build_product_path(BUILT_PRODUCTS_DIR_VARIABLE))
    return frameworks


def frameworks_by_config(
    target: AggregateTarget,
    resolver: ConfigurationResolver,
    sandbox_root: Path,
) -> ConfigurationArtifactMap:
    result: ConfigurationArtifactMap = {}
    for config in target.user_build_configurations:
        result[config] = [
            path
            for pod_target in target.pod_targets
            if resolver.includes(pod_target, config)
            for path in _pod_target_frameworks(pod_target, sandbox_root)
        ]
    return result
