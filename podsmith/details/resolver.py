from typing import Iterable, List

from podsmith.details.targets.pod_target import PodTarget
from podsmith.details.targets.target_definition import TargetDefinition
from podsmith.errors import ConflictingConfigurationWhitelist


class ConfigurationResolver:
    """Decides which pod targets take part in a build configuration.

    Answers are recomputed on every call so they always reflect the current
    whitelist of the target definition.
    """

    def __init__(self, target_definition: TargetDefinition):
        self.target_definition = target_definition

    def includes(self, pod_target: PodTarget, configuration_name: str) -> bool:
        whitelists = {
            self.target_definition.pod_whitelisted_for_configuration(
                dependency, configuration_name
            )
            for dependency in pod_target.dependencies
        }
        if not whitelists:
            return True
        if len(whitelists) > 1:
            raise ConflictingConfigurationWhitelist(
                pod_target.pod_name, self.target_definition.name
            )
        return whitelists.pop()


# Pods shipped as compiled frameworks carry their own resources inside the
# framework, only the remaining pods have loose resources to copy.
def library_candidates(pod_targets: Iterable[PodTarget]) -> List[PodTarget]:
    return [
        pod_target
        for pod_target in pod_targets
        if not (pod_target.should_build and pod_target.requires_frameworks)
    ]
