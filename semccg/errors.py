#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : errors.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/02/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Exceptions shared across the package. Rule non-matches and empty parses are not errors and never raise."""

__all__ = ['SemCCGError', 'ConfigurationError', 'ScorerConfigurationError', 'ExecutionError']


class SemCCGError(Exception):
    """The base class of all errors raised by this package."""
    pass


class ConfigurationError(SemCCGError):
    """Raised at construction time when a component receives malformed parameters."""
    pass


class ScorerConfigurationError(ConfigurationError):
    """Raised when a scorer is created from malformed parameters (e.g., a cost that is not a number)."""
    pass


class ExecutionError(SemCCGError):
    """Raised by executors when a meaning representation can not be executed against a state.
    The joint parser treats it as a failed execution of that derivation."""
    pass
