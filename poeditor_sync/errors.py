#!/usr/bin/env python3

from typing import Optional


class LocalizationError(Exception):
    """Base exception for the localization sync workflow"""


class ConfigError(LocalizationError):
    """Raised when a configuration value cannot be used"""


class AuthError(LocalizationError):
    """Raised when POEditor credentials are missing or rejected"""


class FetchError(LocalizationError):
    """Raised when the list of project languages cannot be fetched"""


class PublishError(LocalizationError):
    """Raised when exporting or downloading one language fails"""

    def __init__(self, language: str, message: str):
        super().__init__(f"{language}: {message}")
        self.language = language


class PersistenceError(LocalizationError):
    """Raised when a locale file cannot be written"""

    def __init__(self, language: str, path: str, message: Optional[str] = None):
        super().__init__(f"{language}: could not write {path}" + (f" ({message})" if message else ""))
        self.language = language
        self.path = path
