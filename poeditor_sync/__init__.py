"""POEditor localization sync package"""

from .config import Config
from .errors import (
    LocalizationError, ConfigError, AuthError, FetchError, PublishError, PersistenceError
)
from .models import RunState, LanguageResult, RunReport
from .poeditor import POEditorClient
from .file_processor import FileProcessor
from .git_operations import GitOperations

__all__ = [
    'Config', 'POEditorClient', 'FileProcessor', 'GitOperations',
    'RunState', 'LanguageResult', 'RunReport',
    'LocalizationError', 'ConfigError', 'AuthError', 'FetchError', 'PublishError', 'PersistenceError',
]
