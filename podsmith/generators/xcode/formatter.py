"""
Pods project file formatter.

Turns an XcodeProject into .pbxproj text. Objects are written grouped by
their isa in `/* Begin <isa> section */` blocks, sorted by id, so the output
only depends on the model contents.
"""

import dataclasses
import enum
import re
from itertools import groupby
from typing import Dict, List, Optional

from podsmith.generators.xcode.model import (
    PBXFileReference,
    PBXGroup,
    Reference,
    XcodeID,
    XcodeObject,
    XcodeProject,
)

_UNQUOTED = re.compile(r"^[A-Za-z0-9_$/:.]+$")


def format_xcode_project(project: XcodeProject) -> str:
    """
    Convert an XcodeProject to the text of a project.pbxproj file.

    Args:
        project: The project model to format.

    Returns:
        The file contents, ending with a newline.
    """
    names = {obj.id: object_comment(obj) for obj in project.objects}
    lines = [
        "// !$*UTF8*$!",
        "{",
        "\tarchiveVersion = 1;",
        "\tclasses = {",
        "\t};",
        "\tobjectVersion = 46;",
        "\tobjects = {",
    ]
    ordered = sorted(project.objects, key=lambda o: (o.__class__.__name__, o.id))
    for isa, objects in groupby(ordered, key=lambda o: o.__class__.__name__):
        lines.append("")
        lines.append(f"/* Begin {isa} section */")
        for obj in objects:
            lines.append(f"\t\t{format_id(obj.id, names)} = {format_object(obj, names, 2)};")
        lines.append(f"/* End {isa} section */")
    lines.extend(
        [
            "\t};",
            f"\trootObject = {format_id(project.project.id, names)};",
            "}",
        ]
    )
    return "\n".join(lines) + "\n"


def object_comment(obj: XcodeObject) -> Optional[str]:
    if isinstance(obj, (PBXFileReference, PBXGroup)):
        return obj.name or obj.path
    name = getattr(obj, "name", None)
    if name:
        return name
    return obj.__class__.__name__.replace("PBX", "").replace("BuildPhase", "")


def format_id(id: XcodeID, names: Dict[XcodeID, Optional[str]]) -> str:
    comment = names.get(id)
    if comment:
        return f"{id} /* {comment} */"
    return id


def format_object(obj: XcodeObject, names: Dict[XcodeID, Optional[str]], indent_level: int) -> str:
    properties: Dict[str, object] = {"isa": obj.__class__.__name__}
    for field in dataclasses.fields(obj):
        if field.name == "id" or field.metadata.get("internal"):
            continue
        value = getattr(obj, field.name)
        if value is None:
            continue
        properties[field.name] = value
    return format_dict(properties, names, indent_level)


def format_value(value, names: Dict[XcodeID, Optional[str]], indent_level: int) -> str:
    if isinstance(value, Reference):
        return format_id(value.id, names)
    elif isinstance(value, XcodeID):
        return format_id(value, names)
    elif isinstance(value, enum.Enum):
        return format_value(value.value, names, indent_level)
    elif isinstance(value, dict):
        return format_dict(value, names, indent_level)
    elif isinstance(value, list):
        return format_list(value, names, indent_level)
    elif isinstance(value, bool):
        return "1" if value else "0"
    elif isinstance(value, (int, float)):
        return str(value)
    elif isinstance(value, str):
        return quote(value)
    raise TypeError(f"Unsupported type: {type(value).__name__} for value: {value}")


def format_dict(value: Dict[str, object], names: Dict[XcodeID, Optional[str]], indent_level: int) -> str:
    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)
    entries = [
        f"{inner_indent}{quote(key)} = {format_value(item, names, indent_level + 1)};"
        for key, item in sorted(value.items(), key=lambda kv: (kv[0] != "isa", kv[0]))
    ]
    return "{\n" + "".join(f"{e}\n" for e in entries) + indent + "}"


def format_list(value: List[object], names: Dict[XcodeID, Optional[str]], indent_level: int) -> str:
    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)
    items = [
        f"{inner_indent}{format_value(item, names, indent_level + 1)},\n"
        for item in value
    ]
    return "(\n" + "".join(items) + indent + ")"


def quote(value: str) -> str:
    if _UNQUOTED.match(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'
