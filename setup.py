#!/usr/bin/python3

from setuptools import setup

setup(
    name="semodinstall",
    version="1.0",
    description="SELinux policy module installer",
    author="semodinstall contributors",
    license="GPL-2.0-only",
    package_dir={"": "src"},
    packages=["semodinstall"],
    python_requires=">=3.6",
    install_requires=[
        "selinux",
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "semodinstall = semodinstall.cli:main",
        ],
    },
)
