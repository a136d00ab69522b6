# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

from setuptools import setup

from payload_extents._internal import version

with open("README.md") as f:
    long_description = f.read()

setup(
    author="Payload Extents Authors",
    description="Extent arithmetic for block based update payloads",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GNU GPLv2+",
    name="payload-extents",
    packages=[
        "payload_extents",
        "payload_extents._internal",
    ],
    platforms=["Linux"],
    scripts=["payload-extents"],
    version=version.string,
    python_requires=">=3.6",
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Archiving",
        "Topic :: Utilities",
    ],
)
