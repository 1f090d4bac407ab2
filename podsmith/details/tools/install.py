import logging
from argparse import ArgumentParser
from concurrent.futures import ThreadPoolExecutor
from typing import List

from podsmith import Config
from podsmith.details.installer import AggregateTargetInstaller, InstallationState
from podsmith.details.targets.aggregate_target import AggregateTarget
from podsmith.details.workspace import Workspace

logger = logging.getLogger(__name__)


def check_support_files_dirs(targets: List[AggregateTarget]):
    seen = {}
    for target in targets:
        key = target.support_files_dir
        if key in seen:
            raise ValueError(
                f"targets '{seen[key]}' and '{target.name}' share the support files directory {key}"
            )
        seen[key] = target.name


def install_targets(
    workspace: Workspace, targets: List[AggregateTarget], jobs: int
) -> List[InstallationState]:
    check_support_files_dirs(targets)
    project = workspace.project()
    installer = AggregateTargetInstaller(project, workspace.config)
    with ThreadPoolExecutor(max_workers=max(jobs, 1)) as executor:
        states = list(executor.map(installer.install, targets))
    project.save()
    logger.info("wrote %s", project.path)
    return states


def install_main(
    workspace: Workspace,
    config: Config,
    top_level_targets: List[str],
    command_args: List[str],
):
    parser = ArgumentParser(prog="podsmith install")
    parser.add_argument("--jobs", "-j", type=int, default=config.jobs)
    args = parser.parse_args(command_args)
    targets = workspace.select(top_level_targets)
    for state in install_targets(workspace, targets, args.jobs):
        print(f"{state.target.name}: {len(state.artifacts)} support files")
