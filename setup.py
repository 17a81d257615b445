#!/usr/bin/env/python

"""
setup.py

===============================================================================

    Copyright (C) 2019 Rudolf Cardinal (rudolf@pobox.com).

    This file is part of drc_supervision.

    This is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This software is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this software. If not, see <https://www.gnu.org/licenses/>.

===============================================================================

Python package configuration.

"""

from setuptools import setup, find_packages

from drc_supervision.version import VERSION

setup(
    name="drc_supervision",
    version=VERSION,
    description="Check research scholar supervision against faculty capacity",
    author="Rudolf Cardinal",
    author_email="rudolf@pobox.com",
    license="GNU General Public License v3 or later (GPLv3+)",
    # See https://pypi.org/classifiers/
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Education",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",  # noqa
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Education",
    ],
    # Python code:
    packages=find_packages(),
    # Requirements:
    install_requires=[
        "cardinal_pythonlib>=1.1.23",
        "openpyxl>=3.0.10",
        "lxml>=4.9.1",  # Will speed up openpyxl
    ],
    extras_require={
        # ---------------------------------------------------------------------
        # For development:
        # ---------------------------------------------------------------------
        "test": [
            "pytest",
        ],
        "dev": [
            "black",  # auto code formatter
            "flake8",  # code checks
            "pytest",  # automatic testing
        ],
    },
    # Launch scripts:
    entry_points={
        "console_scripts": [
            # Format is 'script=module:function".
            "drc_supervision=drc_supervision.main:main",
        ],
    },
)
