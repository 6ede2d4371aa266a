import re
import sys
from pathlib import Path

from setuptools import find_packages, setup

project_dir = Path(__file__).parent


def get_version():
    text = (project_dir / "src" / "poolform" / "version.py").read_text()
    match = re.compile(r"__version__\s*=\s*\"?([^\n\"]+)\"?.*").match(text)
    if match:
        if match.group(1) != "None":
            return match.group(1)
        else:
            return None
    else:
        sys.exit("Can't parse version.py")


def get_long_description():
    return open(project_dir / "README.md").read()


BASE_DEPS = [
    "pyyaml",
    "requests",
    "typing-extensions>=4.0.0",
    "rich",
    "rich-argparse",
    "pydantic>=1.10.10,<2.0.0",
    "pydantic-duality>=1.2.4",
    "orjson",
]

TEST_DEPS = [
    "pytest",
    "requests-mock",
]

setup(
    name="poolform",
    version=get_version(),
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["tests", "tests.*"]),
    include_package_data=True,
    scripts=[],
    entry_points={
        "console_scripts": ["poolform=poolform._internal.cli.main:main"],
    },
    description="Declarative instance pool management for compute workspaces.",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    install_requires=BASE_DEPS,
    extras_require={
        # the fixture harness in poolform._internal.testing needs requests-mock at runtime
        "testing": ["requests-mock"],
        "tests": TEST_DEPS,
    },
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)",
        "Programming Language :: Python :: 3",
    ],
)
