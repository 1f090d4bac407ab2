import subprocess
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import List

from podsmith.details.as_iterator import unique
from podsmith.errors import GeneratorWriteFailure
from podsmith.generators.base import Generator, write_if_changed

GEN_BRIDGE_METADATA = "gen_bridge_metadata"


# Bridge support metadata lets runtime-interpreted environments (MacRuby,
# PyObjC, ...) call into the C functions and constants the headers declare.
class BridgeSupport(Generator):
    def __init__(self, headers: List[Path]):
        self.headers = [Path(h) for h in headers]

    @property
    def search_paths(self) -> List[str]:
        return [f"-I{d}" for d in unique(str(h.parent) for h in self.headers)]

    def generate(self) -> bytes:
        with TemporaryDirectory() as tmp:
            output = Path(tmp).joinpath("metadata.bridgesupport")
            args = [
                GEN_BRIDGE_METADATA,
                "-c",
                " ".join(self.search_paths),
                "-o",
                str(output),
                *[str(h) for h in self.headers],
            ]
            try:
                subprocess.check_call(args)
                return output.read_bytes()
            except (OSError, subprocess.CalledProcessError) as e:
                raise GeneratorWriteFailure(output, f"{GEN_BRIDGE_METADATA} failed: {e}") from e

    # Failures name the destination, not the temporary output
    def save_as(self, path: Path) -> None:
        try:
            contents = self.generate()
        except GeneratorWriteFailure as e:
            raise GeneratorWriteFailure(path, e.reason) from e
        write_if_changed(Path(path), contents)
