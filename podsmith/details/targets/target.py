import re
from typing import Dict

PLATFORM_DISPLAY_NAMES: Dict[str, str] = {
    "ios": "iOS",
    "osx": "macOS",
    "tvos": "tvOS",
    "watchos": "watchOS",
}


class Platform:
    def __init__(self, name: str, deployment_target: str = ""):
        if name not in PLATFORM_DISPLAY_NAMES:
            raise ValueError(f"unsupported platform {name}")
        self.name = name
        self.deployment_target = deployment_target

    def __str__(self):
        display = PLATFORM_DISPLAY_NAMES[self.name]
        if self.deployment_target:
            return f"{display} {self.deployment_target}"
        return display

    def __eq__(self, other):
        if not isinstance(other, Platform):
            return NotImplemented
        return (self.name, self.deployment_target) == (other.name, other.deployment_target)

    def __hash__(self):
        return hash((self.name, self.deployment_target))


def c99ext_identifier(name: str) -> str:
    identifier = re.sub(r"[^A-Za-z0-9_]", "_", name)
    if identifier[:1].isdigit():
        identifier = f"_{identifier}"
    return identifier


class Target:
    def __init__(self, *, name: str, platform: Platform):
        self.name = name
        self.platform = platform

    @property
    def label(self) -> str:
        return self.name

    @property
    def product_module_name(self) -> str:
        return c99ext_identifier(self.label)

    def __repr__(self):
        return f"<{self.__class__.__name__} name={self.name!r} platform={self.platform}>"
