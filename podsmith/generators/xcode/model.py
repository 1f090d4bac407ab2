# Pods project file model.
#
# Dataclasses for the subset of the .pbxproj object graph that the Pods
# project uses: file references and groups for the support files, and native
# targets with their build phases and per-configuration build settings.
# Object ids are derived from a stable key so regenerating the project yields
# the same file.

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Generic, List, Optional, TypeVar, Union

import uuid


class XcodeID(str):
    pass


def generate_id(key: str) -> XcodeID:
    return XcodeID(uuid.uuid5(uuid.NAMESPACE_X500, key).hex.upper()[:24])


class SourceTree(Enum):
    GROUP = "<group>"
    SOURCE_ROOT = "SOURCE_ROOT"
    BUILT_PRODUCTS_DIR = "BUILT_PRODUCTS_DIR"


class FileType(Enum):
    C_HEADER = "sourcecode.c.h"
    OBJC = "sourcecode.c.objc"
    PLIST = "text.plist.xml"
    XCCONFIG = "text.xcconfig"
    SHELL_SCRIPT = "text.script.sh"
    MARKDOWN = "net.daringfireball.markdown"
    MODULE_MAP = "sourcecode.module-map"
    FRAMEWORK = "wrapper.framework"
    ARCHIVE = "archive.ar"
    TEXT = "text"

    @staticmethod
    def from_extension(ext: str) -> "FileType":
        ext_to_type = {
            "h": FileType.C_HEADER,
            "m": FileType.OBJC,
            "plist": FileType.PLIST,
            "xcconfig": FileType.XCCONFIG,
            "sh": FileType.SHELL_SCRIPT,
            "markdown": FileType.MARKDOWN,
            "md": FileType.MARKDOWN,
            "modulemap": FileType.MODULE_MAP,
            "framework": FileType.FRAMEWORK,
            "a": FileType.ARCHIVE,
        }
        return ext_to_type.get(ext.lstrip(".").lower(), FileType.TEXT)


class ProductType(Enum):
    FRAMEWORK = "com.apple.product-type.framework"
    STATIC_LIBRARY = "com.apple.product-type.library.static"


# Bookkeeping fields that are not written to the project file
INTERNAL = {"internal": True}

ReferenceT = TypeVar("ReferenceT", bound="XcodeObject")


@dataclass
class Reference(Generic[ReferenceT]):
    id: XcodeID
    comment: Optional[str] = None


@dataclass
class XcodeObject(ABC):
    id: XcodeID = field(init=False)

    def __post_init__(self) -> None:
        self.id = generate_id(self.key())

    @abstractmethod
    def key(self) -> str:
        pass

    def ref(self, comment: Optional[str] = None) -> Reference:
        return Reference(self.id, comment)


@dataclass
class PBXFileReference(XcodeObject):
    name: str
    path: str
    sourceTree: SourceTree
    lastKnownFileType: Optional[FileType] = None
    includeInIndex: Optional[int] = None

    def key(self) -> str:
        return f"PBXFileReference:{self.sourceTree.name}:{self.path}"


@dataclass
class PBXBuildFile(XcodeObject):
    fileRef: Reference[PBXFileReference]
    target_name: str = field(metadata=INTERNAL)
    settings: Optional[Dict[str, List[str]]] = None

    def key(self) -> str:
        return f"PBXBuildFile:{self.fileRef.id}:{self.target_name}"


@dataclass
class BuildPhase(XcodeObject):
    target_name: str = field(metadata=INTERNAL)
    files: List[Reference[PBXBuildFile]] = field(default_factory=list)
    buildActionMask: int = 2147483647
    runOnlyForDeploymentPostprocessing: int = 0

    def key(self) -> str:
        return f"{self.__class__.__name__}:{self.target_name}"


@dataclass
class PBXSourcesBuildPhase(BuildPhase):
    pass


@dataclass
class PBXHeadersBuildPhase(BuildPhase):
    pass


@dataclass
class PBXFrameworksBuildPhase(BuildPhase):
    pass


@dataclass
class PBXGroup(XcodeObject):
    name: str
    sourceTree: SourceTree
    children: List[Reference[Union["PBXGroup", PBXFileReference]]] = field(
        default_factory=list
    )
    path: Optional[str] = None

    def key(self) -> str:
        return f"PBXGroup:{self.name}:{self.path or ''}"


@dataclass
class XCBuildConfiguration(XcodeObject):
    name: str
    buildSettings: Dict[str, str]
    owner: str = field(metadata=INTERNAL)
    baseConfigurationReference: Optional[Reference[PBXFileReference]] = None

    def key(self) -> str:
        return f"XCBuildConfiguration:{self.owner}:{self.name}"


@dataclass
class XCConfigurationList(XcodeObject):
    buildConfigurations: List[Reference[XCBuildConfiguration]]
    owner: str = field(metadata=INTERNAL)
    defaultConfigurationIsVisible: int = 0
    defaultConfigurationName: str = "Release"

    def key(self) -> str:
        return f"XCConfigurationList:{self.owner}"


@dataclass
class PBXNativeTarget(XcodeObject):
    name: str
    buildConfigurationList: Reference[XCConfigurationList]
    buildPhases: List[Reference[BuildPhase]]
    productName: str
    productReference: Reference[PBXFileReference]
    productType: ProductType
    dependencies: List[Reference] = field(default_factory=list)
    buildRules: List[Reference] = field(default_factory=list)

    def key(self) -> str:
        return f"PBXNativeTarget:{self.name}"


@dataclass
class PBXProject(XcodeObject):
    name: str
    buildConfigurationList: Reference[XCConfigurationList]
    mainGroup: Reference[PBXGroup]
    productRefGroup: Reference[PBXGroup]
    targets: List[Reference[PBXNativeTarget]] = field(default_factory=list)
    compatibilityVersion: str = "Xcode 3.2"
    developmentRegion: str = "English"
    hasScannedForEncodings: int = 0
    knownRegions: List[str] = field(default_factory=lambda: ["en"])
    projectDirPath: str = ""
    projectRoot: str = ""

    def key(self) -> str:
        return f"PBXProject:{self.name}"


# Flat container handed to the formatter
@dataclass
class XcodeProject:
    project: PBXProject
    objects: List[XcodeObject]
