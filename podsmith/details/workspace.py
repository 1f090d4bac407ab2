import json
from pathlib import Path
from typing import Any, Dict, List

from podsmith import Config, ManifestError
from podsmith.details.targets.aggregate_target import AggregateTarget
from podsmith.details.targets.file_accessor import FileAccessor
from podsmith.details.targets.pod_target import PodTarget
from podsmith.details.targets.target import Platform
from podsmith.details.targets.target_definition import TargetDefinition
from podsmith.generators.xcode.project import PodsProject


def load_platform(data: Dict[str, Any]) -> Platform:
    return Platform(data["name"], data.get("deployment_target", ""))


# Resources and vendored artifacts in the manifest are relative to the sandbox
def load_file_accessor(data: Dict[str, Any], sandbox_root: Path) -> FileAccessor:
    return FileAccessor(
        spec_name=data["spec_name"],
        resources=[sandbox_root.joinpath(p) for p in data.get("resources", [])],
        resource_bundles={
            name: [sandbox_root.joinpath(p) for p in paths]
            for name, paths in data.get("resource_bundles", {}).items()
        },
        vendored_dynamic_artifacts=[
            sandbox_root.joinpath(p) for p in data.get("vendored_dynamic_artifacts", [])
        ],
        license=data.get("license"),
    )


def load_pod_target(data: Dict[str, Any], sandbox_root: Path) -> PodTarget:
    return PodTarget(
        name=data["name"],
        platform=load_platform(data["platform"]),
        should_build=data.get("should_build", True),
        requires_frameworks=data.get("requires_frameworks", False),
        dependencies=data.get("dependencies", []),
        file_accessors=[
            load_file_accessor(fa, sandbox_root) for fa in data.get("file_accessors", [])
        ],
    )


class Workspace:
    """Pods sandbox description loaded from a JSON manifest.

    The manifest has three sections: `config` (keyword arguments of
    `Config`, with `sandbox_root` relative to the manifest's directory),
    `pod_targets` and `aggregate_targets`. Aggregate targets name the pod
    targets they link.
    """

    def __init__(
        self,
        config: Config,
        pod_targets: Dict[str, PodTarget],
        aggregate_targets: Dict[str, AggregateTarget],
    ):
        self.config = config
        self.pod_targets = pod_targets
        self.aggregate_targets = aggregate_targets

    @staticmethod
    def load(path: Path) -> "Workspace":
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                manifest = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ManifestError(f"failed to read manifest {path}: {e}") from e
        try:
            return Workspace._from_manifest(manifest, path.parent.resolve())
        except KeyError as e:
            raise ManifestError(f"{path}: missing key {e}") from e
        except (TypeError, ValueError) as e:
            raise ManifestError(f"{path}: {e}") from e

    @staticmethod
    def _from_manifest(manifest: Dict[str, Any], manifest_dir: Path) -> "Workspace":
        config_args = dict(manifest["config"])
        sandbox_root = manifest_dir.joinpath(config_args.pop("sandbox_root"))
        if "project_path" in config_args:
            config_args["project_path"] = manifest_dir.joinpath(config_args["project_path"])
        config = Config(sandbox_root, **config_args)

        pod_targets: Dict[str, PodTarget] = {}
        for data in manifest.get("pod_targets", []):
            pod_target = load_pod_target(data, config.sandbox_root)
            if pod_target.name in pod_targets:
                raise ManifestError(f"pod target '{pod_target.name}' defined twice")
            pod_targets[pod_target.name] = pod_target

        aggregate_targets: Dict[str, AggregateTarget] = {}
        for data in manifest.get("aggregate_targets", []):
            name = data["name"]
            if name in aggregate_targets:
                raise ManifestError(f"aggregate target '{name}' defined twice")
            missing = [n for n in data.get("pod_targets", []) if n not in pod_targets]
            if missing:
                raise ManifestError(
                    f"aggregate target '{name}' links unknown pod targets: {', '.join(missing)}"
                )
            definition = data.get("target_definition", {})
            aggregate_targets[name] = AggregateTarget(
                name=name,
                platform=load_platform(data["platform"]),
                sandbox_root=config.sandbox_root,
                user_build_configurations=data["user_build_configurations"],
                pod_targets=[pod_targets[n] for n in data.get("pod_targets", [])],
                target_definition=TargetDefinition(
                    definition.get("name", name),
                    definition.get("configuration_whitelist"),
                ),
                requires_frameworks=data.get("requires_frameworks", False),
                requires_host_target=data.get("requires_host_target", False),
            )
        return Workspace(config, pod_targets, aggregate_targets)

    def select(self, names: List[str]) -> List[AggregateTarget]:
        if not names:
            return list(self.aggregate_targets.values())
        unknown = [n for n in names if n not in self.aggregate_targets]
        if unknown:
            raise ManifestError(f"unknown aggregate targets: {', '.join(unknown)}")
        return [self.aggregate_targets[n] for n in names]

    # Project configurations are the union of every target's, first seen wins
    def project(self) -> PodsProject:
        configurations: Dict[str, str] = {}
        for target in self.aggregate_targets.values():
            for name, kind in target.user_build_configurations.items():
                configurations.setdefault(name, kind)
        return PodsProject(self.config.project_path, configurations)
