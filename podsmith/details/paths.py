import os
import re
from pathlib import Path
from typing import Union

from podsmith.errors import InvalidArtifactPath

PODS_ROOT_VARIABLE = "${PODS_ROOT}"

_UNSAFE_SHELL_CHARS = re.compile(r"([^A-Za-z0-9_\-.,:+/@\n])")


def relative_path(path: Union[str, Path], root: Union[str, Path], owner: str) -> str:
    """Express `path` relative to `root` as a POSIX string.

    Both paths must be absolute. Paths outside of `root` are expressed with
    leading `..` components, the same way build scripts reference development
    pods that live next to the sandbox.
    """
    path = Path(path)
    root = Path(root)
    if not path.is_absolute() or not root.is_absolute():
        raise InvalidArtifactPath(path, root, owner)
    try:
        relative = os.path.relpath(path, root)
    except ValueError:
        # different drives on windows
        raise InvalidArtifactPath(path, root, owner) from None
    return Path(relative).as_posix()


def pods_root_path(path: Union[str, Path], sandbox_root: Union[str, Path], owner: str) -> str:
    return f"{PODS_ROOT_VARIABLE}/{relative_path(path, sandbox_root, owner)}"


def shellescape(value: str) -> str:
    """Backslash-escape a word for use in a POSIX shell script."""
    if not value:
        return "''"
    escaped = _UNSAFE_SHELL_CHARS.sub(r"\\\1", value)
    return escaped.replace("\n", "'\n'")
