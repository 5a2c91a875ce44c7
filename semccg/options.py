#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : options.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/04/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Global debug options. Use ``options.xxx`` to read them, and ``jacinle.config.environ_v2.set_configs`` to change them.

- ``debug_print``: print the chart after each parse.
- ``log_chart_summary``: log the number of retained cells per span length after each parse.
- ``log_verbose_parses``: log the lexical entries and rules used by each logged parse in the learners.
"""

from jacinle.config.environ_v2 import configs, def_configs

__all__ = ['options']


with def_configs():
    configs.semccg.debug_print = False
    configs.semccg.log_chart_summary = False
    configs.semccg.log_verbose_parses = True


options = configs.semccg
