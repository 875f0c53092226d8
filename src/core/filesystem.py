"""Filesystem utility helpers."""

from __future__ import annotations
import os


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def ensure_parent_dir(path: str) -> None:
    dir_part = os.path.dirname(path)
    if dir_part:
        ensure_dir(dir_part)


def read_text(path: str, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding) as fh:
        return fh.read()
