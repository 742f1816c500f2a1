# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/19 16:20:03
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

from .errors import IoFailure

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def _io_failure(self, e: OSError) -> IoFailure:
        return IoFailure(f'cannot access {self._fn}: {e.strerror or e}')

    def __str__(self) -> str:
        return self._fn
