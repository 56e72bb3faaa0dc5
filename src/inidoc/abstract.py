# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/18 14:05:40
# @Author : inidoc contributors

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Binds a document type to one path on disk."""
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
