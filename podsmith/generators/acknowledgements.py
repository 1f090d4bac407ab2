import plistlib
from pathlib import Path
from typing import Dict, List, Type

from podsmith.details.targets.file_accessor import FileAccessor
from podsmith.generators.base import Generator

HEADER_TITLE = "Acknowledgements"
HEADER_TEXT = "This application makes use of the following third party libraries:"
FOOTER_TEXT = "Generated by podsmith"


class Acknowledgements(Generator):
    """License notices of every pod, one file per output format."""

    file_extension = ""

    @classmethod
    def generators(cls) -> List[Type["Acknowledgements"]]:
        return [MarkdownAcknowledgements, PlistAcknowledgements]

    @classmethod
    def path_from_basepath(cls, basepath: Path) -> Path:
        return Path(f"{basepath}.{cls.file_extension}")

    def __init__(self, file_accessors: List[FileAccessor]):
        self.file_accessors = file_accessors

    # root spec name -> license text, first declared license wins
    @property
    def licenses(self) -> Dict[str, str]:
        licenses: Dict[str, str] = {}
        for accessor in self.file_accessors:
            name = accessor.root_spec_name
            if accessor.license and not licenses.get(name):
                licenses[name] = accessor.license.strip()
            licenses.setdefault(name, "")
        return {name: text for name, text in licenses.items() if text}


class MarkdownAcknowledgements(Acknowledgements):
    file_extension = "markdown"

    def generate(self) -> str:
        text = f"# {HEADER_TITLE}\n{HEADER_TEXT}\n"
        for name, license in self.licenses.items():
            text += f"\n## {name}\n\n{license}\n"
        text += f"\n{FOOTER_TEXT}\n"
        return text


class PlistAcknowledgements(Acknowledgements):
    file_extension = "plist"

    def generate(self) -> bytes:
        specifiers = [
            {"FooterText": HEADER_TEXT, "Title": HEADER_TITLE, "Type": "PSGroupSpecifier"}
        ]
        specifiers += [
            {"FooterText": license, "Title": name, "Type": "PSGroupSpecifier"}
            for name, license in self.licenses.items()
        ]
        specifiers.append({"FooterText": FOOTER_TEXT, "Title": "", "Type": "PSGroupSpecifier"})
        return plistlib.dumps(
            {
                "PreferenceSpecifiers": specifiers,
                "StringsTable": HEADER_TITLE,
                "Title": HEADER_TITLE,
            },
            sort_keys=True,
        )
