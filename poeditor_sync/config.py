#!/usr/bin/env python3

import datetime
import os
from dataclasses import dataclass, field

from .errors import AuthError, ConfigError


DEFAULT_PR_BODY = (
    "Automatically updated localizations from [POEditor][1]\n"
    "\n"
    "[1]: https://poeditor.com/projects/"
)


@dataclass
class Config:
    """Configuration management for the localization sync workflow"""

    # Credentials
    api_token: str = field(default_factory=lambda: Config._env_required('POEDITOR_API_TOKEN'))
    project_id: str = field(default_factory=lambda: Config._env_required('POEDITOR_PROJECT_ID'))

    # API settings
    api_url: str = field(default_factory=lambda: os.getenv('POEDITOR_API_URL', 'https://api.poeditor.com/v2').strip())
    export_type: str = field(default_factory=lambda: os.getenv('EXPORT_TYPE', 'key_value_json').strip())
    request_timeout: float = field(default_factory=lambda: Config._env_float('REQUEST_TIMEOUT', '30'))
    run_timeout: float = field(default_factory=lambda: Config._env_float('RUN_TIMEOUT', '600'))

    # Output
    locale_dir: str = field(default_factory=lambda: os.getenv('LOCALE_DIR', 'locale').strip())

    # Pull request settings
    create_pr: bool = field(default_factory=lambda: Config._env_bool('CREATE_PR', 'true'))
    commit_message: str = field(default_factory=lambda: os.getenv('COMMIT_MESSAGE', 'chore: updated localizations').strip())
    branch_prefix: str = field(default_factory=lambda: os.getenv('BRANCH_PREFIX', 'chore/update-localization-').strip())
    pr_title: str = field(default_factory=lambda: os.getenv('PR_TITLE', 'chore(bot): updated localizations').strip())
    pr_body: str = field(default_factory=lambda: os.getenv('PR_BODY', DEFAULT_PR_BODY).strip())
    draft: bool = field(default_factory=lambda: Config._env_bool('DRAFT', 'false'))
    delete_branch: bool = field(default_factory=lambda: Config._env_bool('DELETE_BRANCH', 'true'))

    def __post_init__(self):
        # Explicitly passed credentials get the same treatment as env values
        self.api_token = (self.api_token or '').strip()
        self.project_id = str(self.project_id or '').strip()
        if not self.api_token:
            raise AuthError('POEditor API token is empty')
        if not self.project_id:
            raise AuthError('POEditor project id is empty')

        self.api_url = self.api_url.rstrip('/')
        for name in ('request_timeout', 'run_timeout'):
            if getattr(self, name) <= 0:
                raise ConfigError(f'{name} must be positive, got {getattr(self, name)}')

    @staticmethod
    def _env_required(name: str) -> str:
        if not (value := os.getenv(name, '').strip()):
            raise AuthError(f'{name} environment variable is required')
        return value

    @staticmethod
    def _env_float(name: str, default: str) -> float:
        raw = os.getenv(name, default).strip()
        try:
            return float(raw)
        except ValueError as e:
            raise ConfigError(f'{name} must be a number, got {raw!r}') from e

    @staticmethod
    def _env_bool(name: str, default: str) -> bool:
        return os.getenv(name, default).strip().lower() == 'true'

    @staticmethod
    def _mask(secret: str) -> str:
        return f"{'*' * 8}{secret[-4:] if len(secret) > 8 else ''}"

    def branch_name(self, day: datetime.date) -> str:
        """Branch used for the pull request of a given run date"""
        return f"{self.branch_prefix}{day.strftime('%Y-%m-%d')}"

    def print_config(self) -> None:
        """Print current configuration"""
        print("\n=== Configuration ===")
        print(f"API Token: {self._mask(self.api_token)}")
        print(f"Project ID: {self._mask(self.project_id)}")
        print(f"API URL: {self.api_url}")
        print(f"Export Type: {self.export_type}")
        print(f"Locale Directory: {self.locale_dir}")
        print(f"Request Timeout: {self.request_timeout}s")
        print(f"Run Timeout: {self.run_timeout}s")
        print(f"Create PR: {self.create_pr}")

        if self.create_pr:
            print(f"Branch Prefix: {self.branch_prefix}")
            print(f"PR Title: {self.pr_title}")
            print(f"Draft: {self.draft}")
            print(f"Delete Stale Branch: {self.delete_branch}")

        print("====================\n")
