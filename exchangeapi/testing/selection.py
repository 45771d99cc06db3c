# This file decides which tests run based on their category tags.
# Include and exclude lists come from the command line or from TEST_INCLUDE_TAGS / TEST_EXCLUDE_TAGS.
# Exclusion always wins over inclusion, and an empty include list means every test is eligible.

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field

from dotenv import load_dotenv


@dataclass(frozen=True)
class TagSelector:
    include: frozenset[str] = field(default_factory=frozenset)
    exclude: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_names(
        cls, *, include: Iterable[str] = (), exclude: Iterable[str] = ()
    ) -> TagSelector:
        return cls(include=frozenset(include), exclude=frozenset(exclude))

    @property
    def is_active(self) -> bool:
        return bool(self.include or self.exclude)

    def selects(self, tags: Iterable[str]) -> bool:
        tag_set = frozenset(tags)
        if self.include and not (tag_set & self.include):
            return False
        return not (tag_set & self.exclude)

    def merged(self, other: TagSelector) -> TagSelector:
        return TagSelector(
            include=self.include | other.include,
            exclude=self.exclude | other.exclude,
        )


def _env_list(name: str) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_tag_selection(*, load_env: bool = True) -> TagSelector:
    """Build the default selector from `.env` and process environment."""

    if load_env:
        load_dotenv()

    return TagSelector.from_names(
        include=_env_list("TEST_INCLUDE_TAGS"),
        exclude=_env_list("TEST_EXCLUDE_TAGS"),
    )
