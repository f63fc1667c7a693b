"""Overview | Detail(disposition): the only state the view carries."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Overview:
    pass


@dataclass(frozen=True)
class Detail:
    disposition: str


ViewState = Union[Overview, Detail]


def select(state: ViewState, disposition: str) -> Detail:
    return Detail(disposition)


def back(state: ViewState) -> Overview:
    return Overview()


def is_detail(state: ViewState) -> bool:
    return isinstance(state, Detail)


def navigate(state: ViewState, disposition=None) -> ViewState:
    """Button handler: a disposition (any value, even falsy) opens it, None goes back."""
    return select(state, disposition) if disposition is not None else back(state)
