#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup

setup(
    name="typist",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="Follows along as you type a practice text, and keeps track of your mistakes",
    long_description="Follows along as you type a practice text, and keeps track of your mistakes",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Education",
    ],
    keywords=[
        "typing",
        "touch typing",
    ],
    python_requires=">=3.10",
    install_requires=[
        "attrs",
        "cattrs",
        "msgspec",
        "python-dateutil>=2.8.1",
        "timeflake>=0.4.0",
        "trio>=0.22.0",
        "sqlalchemy>=1.4.18",
    ],
    extras_require={
        "test": ["pytest>=6.2.4", "pytest-trio>=0.8.0"],
    },
    entry_points={
        "console_scripts": [
            "typist-replay = typist.scripts:replay_cli",
            "typist-stats = typist.scripts:stats_cli",
        ],
    },
)
