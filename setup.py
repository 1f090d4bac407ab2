#!/usr/bin/env python

from setuptools import setup

setup(
    name="podsmith",
    version="0.1.0",
    packages=[
        "podsmith",
        "podsmith.details",
        "podsmith.details.targets",
        "podsmith.details.tools",
        "podsmith.generators",
        "podsmith.generators.xcode",
    ],
    python_requires=">=3.9",
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["podsmith = podsmith.__main__:main"]},
)
