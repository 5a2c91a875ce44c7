#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : vector.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/06/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Sparse real-valued vectors indexed by feature keys. A feature key is a tuple of strings, e.g., ``('LEX', 'red', 'N : red')``."""

from typing import Optional, Union, Iterable, Iterator, Mapping, Tuple, Dict

__all__ = ['FeatureKey', 'SparseVector']

FeatureKey = Tuple[str, ...]


class SparseVector(object):
    """A sparse vector. Missing keys have value 0."""

    def __init__(self, values: Optional[Union[Mapping[FeatureKey, float], Iterable[Tuple[FeatureKey, float]]]] = None):
        self._values: Dict[FeatureKey, float] = dict()
        if values is not None:
            items = values.items() if isinstance(values, Mapping) else values
            for key, value in items:
                self._values[tuple(key)] = self._values.get(tuple(key), 0.0) + float(value)

    def get(self, key: FeatureKey, default: float = 0.0) -> float:
        return self._values.get(key, default)

    def set(self, key: FeatureKey, value: float):
        self._values[key] = float(value)

    def __getitem__(self, key: FeatureKey) -> float:
        return self._values.get(key, 0.0)

    def __setitem__(self, key: FeatureKey, value: float):
        self.set(key, value)

    def __contains__(self, key: FeatureKey) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[FeatureKey]:
        return iter(self._values)

    def keys(self):
        return self._values.keys()

    def items(self):
        return self._values.items()

    def copy(self) -> 'SparseVector':
        return SparseVector(self._values)

    def dot(self, other: 'SparseVector') -> float:
        """The dot product. Iterates over the smaller of the two vectors."""
        a, b = (self, other) if len(self) <= len(other) else (other, self)
        return sum(value * b._values.get(key, 0.0) for key, value in a._values.items())

    def add_times_inplace(self, scale: float, other: 'SparseVector') -> 'SparseVector':
        """``self += scale * other``. Returns self."""
        for key, value in other._values.items():
            self._values[key] = self._values.get(key, 0.0) + scale * value
        return self

    def scale(self, scale: float) -> 'SparseVector':
        return SparseVector({k: v * scale for k, v in self._values.items()})

    def drop_zeros(self, eps: float = 0.0) -> 'SparseVector':
        """Return a copy without entries whose absolute value is at most ``eps``."""
        return SparseVector({k: v for k, v in self._values.items() if abs(v) > eps})

    def __add__(self, other: 'SparseVector') -> 'SparseVector':
        return self.copy().add_times_inplace(1.0, other)

    def __sub__(self, other: 'SparseVector') -> 'SparseVector':
        return self.copy().add_times_inplace(-1.0, other)

    def __neg__(self) -> 'SparseVector':
        return self.scale(-1.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseVector):
            return False
        return self.drop_zeros()._values == other.drop_zeros()._values

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    __hash__ = None

    @staticmethod
    def sum(vectors: Iterable['SparseVector']) -> 'SparseVector':
        output = SparseVector()
        for v in vectors:
            output.add_times_inplace(1.0, v)
        return output

    @staticmethod
    def mean(vectors: Iterable['SparseVector']) -> 'SparseVector':
        vectors = list(vectors)
        if len(vectors) == 0:
            return SparseVector()
        return SparseVector.sum(vectors).scale(1.0 / len(vectors))

    def format_values(self, other: Optional['SparseVector'] = None) -> str:
        """Format the values of this vector at the keys of ``other`` (default: all keys of this vector), e.g., for logging
        the weights of the features that fired in an update."""
        keys = other.keys() if other is not None else self._values.keys()
        return '{' + ', '.join(f'{_format_key(k)}={self._values.get(k, 0.0):.4f}' for k in sorted(keys)) + '}'

    def __str__(self) -> str:
        return 'SparseVector' + self.format_values()

    __repr__ = __str__


def _format_key(key: FeatureKey) -> str:
    return '#'.join(str(x) for x in key)
