# Build settings for the aggregate target's build configurations.
#
# Settings are assembled in layers and merged last-writer-wins:
#   1. project defaults for the configuration kind and platform
#   2. product settings of the target (framework products only)
#   3. fixed overrides that every aggregate target carries

from dataclasses import dataclass, field
from typing import Dict, Optional

from podsmith.details.targets.aggregate_target import AggregateTarget
from podsmith.details.targets.target import Platform
from podsmith.errors import MissingConfigurationData

SettingsMap = Dict[str, str]


@dataclass(frozen=True)
class PlatformSettings:
    sdk_root: str
    deployment_target_setting: str
    extra: SettingsMap = field(default_factory=dict)


PLATFORM_SETTINGS: Dict[str, PlatformSettings] = {
    "ios": PlatformSettings(
        "iphoneos", "IPHONEOS_DEPLOYMENT_TARGET", {"TARGETED_DEVICE_FAMILY": "1,2"}
    ),
    "osx": PlatformSettings("macosx", "MACOSX_DEPLOYMENT_TARGET"),
    "tvos": PlatformSettings(
        "appletvos", "TVOS_DEPLOYMENT_TARGET", {"TARGETED_DEVICE_FAMILY": "3"}
    ),
    "watchos": PlatformSettings(
        "watchos", "WATCHOS_DEPLOYMENT_TARGET", {"TARGETED_DEVICE_FAMILY": "4"}
    ),
}

COMMON_BUILD_SETTINGS: Dict[str, SettingsMap] = {
    "all": {
        "ALWAYS_SEARCH_USER_PATHS": "NO",
        "CLANG_ENABLE_OBJC_ARC": "YES",
        "CODE_SIGN_IDENTITY": "",
        "GCC_C_LANGUAGE_STANDARD": "gnu99",
        "OTHER_LDFLAGS": "",
        "SKIP_INSTALL": "YES",
        "STRIP_STYLE": "debugging",
    },
    "debug": {
        "COPY_PHASE_STRIP": "NO",
        "DEBUG_INFORMATION_FORMAT": "dwarf",
        "ENABLE_TESTABILITY": "YES",
        "GCC_DYNAMIC_NO_PIC": "NO",
        "GCC_OPTIMIZATION_LEVEL": "0",
        "GCC_PREPROCESSOR_DEFINITIONS": "POD_CONFIGURATION_DEBUG=1 DEBUG=1 $(inherited)",
        "ONLY_ACTIVE_ARCH": "YES",
    },
    "release": {
        "COPY_PHASE_STRIP": "NO",
        "DEBUG_INFORMATION_FORMAT": "dwarf-with-dsym",
        "ENABLE_NS_ASSERTIONS": "NO",
        "GCC_PREPROCESSOR_DEFINITIONS": "POD_CONFIGURATION_RELEASE=1 $(inherited)",
        "VALIDATE_PRODUCT": "YES",
    },
}

# Settings a framework product needs on top of the project defaults
FRAMEWORK_PRODUCT_SETTINGS: SettingsMap = {
    "CURRENT_PROJECT_VERSION": "1",
    "DEFINES_MODULE": "YES",
    "DYLIB_COMPATIBILITY_VERSION": "1",
    "DYLIB_CURRENT_VERSION": "$(CURRENT_PROJECT_VERSION)",
    "DYLIB_INSTALL_NAME_BASE": "@rpath",
    "INSTALL_PATH": "$(LOCAL_LIBRARY_DIR)/Frameworks",
    "LD_RUNPATH_SEARCH_PATHS": "$(inherited) @executable_path/Frameworks @loader_path/Frameworks",
    "VERSIONING_SYSTEM": "apple-generic",
    "VERSION_INFO_PREFIX": "",
}


def merge_build_settings(*layers: SettingsMap) -> SettingsMap:
    merged: SettingsMap = {}
    for layer in layers:
        merged.update(layer)
    return merged


def base_build_settings(platform: Platform, kind: Optional[str]) -> SettingsMap:
    if kind not in COMMON_BUILD_SETTINGS or kind == "all":
        raise KeyError(kind)
    platform_settings = PLATFORM_SETTINGS[platform.name]
    settings = merge_build_settings(
        COMMON_BUILD_SETTINGS["all"],
        COMMON_BUILD_SETTINGS[kind],
        {"SDKROOT": platform_settings.sdk_root},
        platform_settings.extra,
    )
    if platform.deployment_target:
        settings[platform_settings.deployment_target_setting] = platform.deployment_target
    return settings


def target_build_settings(target: AggregateTarget) -> SettingsMap:
    if not target.requires_frameworks:
        return {"PRODUCT_NAME": "$(TARGET_NAME)"}
    return merge_build_settings(
        FRAMEWORK_PRODUCT_SETTINGS,
        {"PRODUCT_NAME": target.product_module_name},
    )


# Vendored static frameworks and libraries must not be linked a second time
# into the aggregate target, which shares the xcconfig of the user target.
def aggregate_overrides(bundle_identifier_prefix: str = "org.cocoapods") -> SettingsMap:
    return {
        "CODE_SIGN_IDENTITY[sdk=appletvos*]": "",
        "CODE_SIGN_IDENTITY[sdk=iphoneos*]": "",
        "CODE_SIGN_IDENTITY[sdk=watchos*]": "",
        "MACH_O_TYPE": "staticlib",
        "OTHER_LDFLAGS": "",
        "OTHER_LIBTOOLFLAGS": "",
        "PODS_ROOT": "$(SRCROOT)",
        "PRODUCT_BUNDLE_IDENTIFIER": f"{bundle_identifier_prefix}.${{PRODUCT_NAME:rfc1034identifier}}",
        "SKIP_INSTALL": "YES",
    }


def aggregate_build_settings(
    target: AggregateTarget,
    configuration_name: str,
    bundle_identifier_prefix: str = "org.cocoapods",
) -> SettingsMap:
    kind = target.user_build_configurations.get(configuration_name)
    try:
        base = base_build_settings(target.platform, kind)
    except KeyError:
        raise MissingConfigurationData(target.name, configuration_name, kind) from None
    return merge_build_settings(
        base,
        target_build_settings(target),
        aggregate_overrides(bundle_identifier_prefix),
    )
