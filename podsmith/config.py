from pathlib import Path
from typing import Optional, Union


class Config:
    def __init__(
        self,
        sandbox_root: Union[str, Path],
        project_path: Optional[Union[str, Path]] = None,
        generate_bridge_support: bool = False,
        bundle_identifier_prefix: str = "org.cocoapods",
        jobs: int = 1,
        **kwargs
    ):
        self.sandbox_root = Path(sandbox_root)
        if project_path is None:
            project_path = self.sandbox_root.joinpath("Pods.xcodeproj")
        self.project_path = Path(project_path)
        self.generate_bridge_support = generate_bridge_support
        self.bundle_identifier_prefix = bundle_identifier_prefix
        self.jobs = jobs
        self.__dict__.update(kwargs)

    # Directory that file references in the project are relative to
    @property
    def project_dir(self) -> Path:
        return self.project_path.parent
