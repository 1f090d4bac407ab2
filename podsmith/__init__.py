from podsmith.config import Config
from podsmith.errors import (
    PodsmithError,
    ManifestError,
    MissingConfigurationData,
    InvalidArtifactPath,
    GeneratorWriteFailure,
    ConflictingConfigurationWhitelist,
)
