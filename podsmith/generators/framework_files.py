# Support files a framework product needs: Info.plist, module map and
# umbrella header.

import plistlib

from podsmith.details.targets.aggregate_target import AggregateTarget
from podsmith.generators.base import Generator

PLATFORM_IMPORTS = {
    "ios": "UIKit/UIKit.h",
    "tvos": "UIKit/UIKit.h",
    "osx": "Cocoa/Cocoa.h",
    "watchos": "Foundation/Foundation.h",
}


class InfoPlist(Generator):
    def __init__(self, target: AggregateTarget, version: str = "1.0.0"):
        self.target = target
        self.version = version

    def generate(self) -> bytes:
        info = {
            "CFBundleDevelopmentRegion": "en",
            "CFBundleExecutable": "${EXECUTABLE_NAME}",
            "CFBundleIdentifier": "${PRODUCT_BUNDLE_IDENTIFIER}",
            "CFBundleInfoDictionaryVersion": "6.0",
            "CFBundleName": "${PRODUCT_NAME}",
            "CFBundlePackageType": "FMWK",
            "CFBundleShortVersionString": self.version,
            "CFBundleSignature": "????",
            "CFBundleVersion": "${CURRENT_PROJECT_VERSION}",
            "NSPrincipalClass": "",
        }
        return plistlib.dumps(info, sort_keys=True)


class ModuleMap(Generator):
    def __init__(self, target: AggregateTarget):
        self.target = target

    def generate(self) -> str:
        return (
            f"framework module {self.target.product_module_name} {{\n"
            f'  umbrella header "{self.target.umbrella_header_path.name}"\n'
            "\n"
            "  export *\n"
            "  module * { export * }\n"
            "}\n"
        )


class UmbrellaHeader(Generator):
    def __init__(self, target: AggregateTarget):
        self.target = target

    def generate(self) -> str:
        module = self.target.product_module_name
        return (
            "#ifdef __OBJC__\n"
            f"#import <{PLATFORM_IMPORTS[self.target.platform.name]}>\n"
            "#else\n"
            "#ifndef FOUNDATION_EXPORT\n"
            "#if defined(__cplusplus)\n"
            '#define FOUNDATION_EXPORT extern "C"\n'
            "#else\n"
            "#define FOUNDATION_EXPORT extern\n"
            "#endif\n"
            "#endif\n"
            "#endif\n"
            "\n"
            f"FOUNDATION_EXPORT double {module}VersionNumber;\n"
            f"FOUNDATION_EXPORT const unsigned char {module}VersionString[];\n"
        )
