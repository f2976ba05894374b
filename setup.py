import os
import re
from setuptools import find_packages, setup

project_name = "vecadmin"


this_directory = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(this_directory, "vecadmin/requirements/common.txt")) as f:
    requirements = f.readlines()

with open(os.path.join(this_directory, "vecadmin/requirements/tests.txt")) as f:
    tests = f.readlines()

with open(os.path.join(this_directory, "README.md"), encoding="utf-8") as f:
    long_description = f.read()


req_map = {
    b: a
    for a, b in (
        re.findall(r"^(([^!=<>~]+)(?:[!=<>~].*)?$)", x.strip("\n"))[0]
        for x in requirements
        if x.strip()
    )
}

install_requires = list(req_map.values())
extras_require = {"tests": [t.strip() for t in tests if t.strip()]}

init_file = os.path.join(project_name, "__init__.py")


def get_property(prop):
    result = re.search(
        # find variable with name `prop` in the __init__.py file
        rf'{prop}\s*=\s*[\'"]([^\'"]*)[\'"]',
        open(init_file).read(),
    )
    return result.group(1)


config = {
    "name": project_name,
    "version": get_property("__version__"),
    "description": "Admin API client and NdArray codec for the vector service",
    "long_description": long_description,
    "long_description_content_type": "text/markdown",
    "packages": find_packages(include=["vecadmin", "vecadmin.*"]),
    "install_requires": install_requires,
    "extras_require": extras_require,
    "tests_require": tests,
    "include_package_data": True,
    "package_data": {"vecadmin": ["requirements/*.txt"]},
    "zip_safe": False,
    "python_requires": ">=3.8",
    "license": "MPL-2.0",
    "classifiers": [
        "License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)",
    ],
}

setup(**config)
