import logging
import os
import stat
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from podsmith.errors import GeneratorWriteFailure

logger = logging.getLogger(__name__)

Contents = Union[str, bytes]


def write_if_changed(path: Path, contents: Contents, executable: bool = False) -> bool:
    """Write `contents` to `path` unless the file already holds them.

    Leaving identical files alone keeps their timestamps, so Xcode does not
    rebuild targets whose support files did not change. Returns whether the
    file was written.
    """
    data = contents.encode("utf-8") if isinstance(contents, str) else contents
    path = Path(path)
    try:
        try:
            with path.open("rb") as f:
                unchanged = f.read() == data
        except FileNotFoundError:
            unchanged = False
        if not unchanged:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("wb") as f:
                f.write(data)
        if executable:
            mode = path.stat().st_mode
            os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise GeneratorWriteFailure(path, e.strerror or str(e)) from e
    if not unchanged:
        logger.debug("wrote %s", path)
    return not unchanged


# Serializes data that was aggregated elsewhere into one support file
class Generator(ABC):
    executable = False

    @abstractmethod
    def generate(self) -> Contents:
        pass

    def save_as(self, path: Path) -> None:
        write_if_changed(Path(path), self.generate(), executable=self.executable)
