from pathlib import Path
from typing import Dict, List, Optional


# Read-only view of the files a single spec contributes to its pod target.
class FileAccessor:
    def __init__(
        self,
        *,
        spec_name: str,
        resources: List[Path] = [],
        resource_bundles: Dict[str, List[Path]] = {},
        vendored_dynamic_artifacts: List[Path] = [],
        license: Optional[str] = None,
    ):
        self.spec_name = spec_name
        self._resources = tuple(Path(p) for p in resources)
        self._resource_bundles = {
            name: tuple(Path(p) for p in paths)
            for name, paths in resource_bundles.items()
        }
        self._vendored_dynamic_artifacts = tuple(
            Path(p) for p in vendored_dynamic_artifacts
        )
        self.license = license

    @property
    def root_spec_name(self) -> str:
        return self.spec_name.split("/")[0]

    @property
    def resources(self) -> List[Path]:
        return list(self._resources)

    @property
    def resource_bundles(self) -> Dict[str, List[Path]]:
        return {name: list(paths) for name, paths in self._resource_bundles.items()}

    @property
    def vendored_dynamic_artifacts(self) -> List[Path]:
        return list(self._vendored_dynamic_artifacts)
