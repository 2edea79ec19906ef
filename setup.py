# Copyright 2012-2025 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Setuptools installer for the in-memory IP provider."""

from os.path import dirname, join

from setuptools import find_namespace_packages, setup


def read(filename):
    """Return the whitespace-stripped content of `filename`."""
    path = join(dirname(__file__), filename)
    with open(path, "r") as fin:
        return fin.read().strip()


setup(
    name="ipam-provider",
    version="1.0.0",
    license="AGPLv3",
    description="In-memory IP address allocation for a single network range",
    long_description=read("README.rst"),
    packages=find_namespace_packages(
        where="src",
        include=["ipamcommon*", "ipamservicelayer*", "ipamtesting*"],
    ),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "netaddr",
        "pydantic",
        "structlog",
    ],
    extras_require={
        "testing": [
            "pytest",
            "pytest-mock",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Information Technology",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: GNU Affero General Public License v3",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Networking",
    ],
)
