from pathlib import Path
from typing import Optional, Union


class PodsmithError(Exception):
    pass


class ManifestError(PodsmithError):
    pass


class MissingConfigurationData(PodsmithError):
    def __init__(self, target_name: str, configuration_name: str, kind: Optional[str]):
        self.target_name = target_name
        self.configuration_name = configuration_name
        self.kind = kind
        super().__init__(
            f"no base build settings for configuration '{configuration_name}' "
            f"(kind={kind!r}) of target '{target_name}'"
        )


class InvalidArtifactPath(PodsmithError):
    def __init__(self, path: Union[str, Path], root: Union[str, Path], owner: str):
        self.path = str(path)
        self.root = str(root)
        self.owner = owner
        super().__init__(
            f"cannot make '{self.path}' of '{owner}' relative to '{self.root}'"
        )


class GeneratorWriteFailure(PodsmithError):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"failed to write '{self.path}': {reason}")


class ConflictingConfigurationWhitelist(PodsmithError):
    def __init__(self, pod_name: str, target_definition_name: str):
        self.pod_name = pod_name
        self.target_definition_name = target_definition_name
        super().__init__(
            f"the subspecs of '{pod_name}' are linked to different build "
            f"configurations for the '{target_definition_name}' target"
        )
