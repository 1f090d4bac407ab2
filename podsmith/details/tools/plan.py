from argparse import ArgumentParser
from typing import List

from podsmith import Config
from podsmith.details.aggregation import frameworks_by_config, resources_by_config
from podsmith.details.installer import plan_steps
from podsmith.details.paths import relative_path
from podsmith.details.resolver import ConfigurationResolver
from podsmith.details.workspace import Workspace


def _print_artifact_map(title: str, artifacts):
    print(f"  {title}:")
    for config, paths in artifacts.items():
        print(f"    {config}:")
        for path in paths:
            print(f"      {path}")


# Dry run, nothing is written
def plan_main(
    workspace: Workspace,
    config: Config,
    top_level_targets: List[str],
    command_args: List[str],
):
    parser = ArgumentParser(prog="podsmith plan")
    parser.parse_args(command_args)
    for target in workspace.select(top_level_targets):
        resolver = ConfigurationResolver(target.target_definition)
        print(f"{target.name} ({target.platform})")
        print("  steps:")
        for step in plan_steps(target):
            print(f"    {step}")
        bridge_support_file = None
        if config.generate_bridge_support:
            bridge_support_file = relative_path(
                target.bridge_support_path, config.sandbox_root, target.name
            )
        _print_artifact_map(
            "resources",
            resources_by_config(target, resolver, config.project_dir, bridge_support_file),
        )
        _print_artifact_map(
            "frameworks", frameworks_by_config(target, resolver, config.sandbox_root)
        )
