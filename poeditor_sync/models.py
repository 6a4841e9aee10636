#!/usr/bin/env python3

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class RunState(Enum):
    """Lifecycle of one sync run"""

    NOT_STARTED = "not_started"
    ENUMERATING = "enumerating"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class LanguageResult:
    """Outcome of exporting and storing one language"""

    language: str
    path: Optional[str] = None
    changed: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunReport:
    """Summary of a sync run"""

    state: RunState = RunState.NOT_STARTED
    languages: List[str] = field(default_factory=list)
    results: List[LanguageResult] = field(default_factory=list)
    pr_number: Optional[int] = None
    error: Optional[str] = None

    @property
    def changeset(self) -> List[str]:
        """Locale files whose content changed during this run"""
        return sorted(r.path for r in self.results if r.ok and r.changed)

    @property
    def failures(self) -> List[LanguageResult]:
        return [r for r in self.results if not r.ok]

    @property
    def succeeded(self) -> bool:
        return self.state is RunState.DONE and not self.failures
