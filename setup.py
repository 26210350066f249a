#!/usr/bin/env python3
"""
Packaging for pip install -e .

libcdio itself is a system library (libcdio19 / libcdio on most
distributions) and is loaded at runtime, so it is not listed here.
"""

from setuptools import setup, find_packages

setup(
    name="disc-inspector",
    version="0.1.0",
    description="Optical disc metadata inspector: filesystem, capabilities, tracks and CD-TEXT via libcdio",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.5.0",
        "rich>=13.7.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": [
            "disc-inspector=disc_inspector.main:main",
        ],
    },
)
