#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : setup.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/02/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

from setuptools import setup, find_packages

__version__ = "0.1.0"

setup(
    name="semccg",
    version=__version__,
    author="Jiayuan Mao",
    author_email="maojiayuan@gmail.com",
    description="Weakly supervised semantic parsing with Combinatory Categorial Grammars.",
    long_description="",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "jacinle",
        "tabulate",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False,
    python_requires=">=3.10",
)
