#!/usr/bin/env python3

import os
import tempfile
from pathlib import Path
from typing import Optional

from .errors import PersistenceError, PublishError


class FileProcessor:
    """Handles locale file operations for the sync workflow"""

    def __init__(self, config):
        self.config = config

    def get_output_path(self, language: str) -> str:
        """Generate the locale file path for a language code"""
        if (not language or language.startswith('.') or '..' in language
                or '/' in language or '\\' in language or '\0' in language):
            raise PublishError(language, f"unsafe language code {language!r}")
        return str(Path(self.config.locale_dir) / f"{language}.json")

    def read_file(self, file_path: str) -> Optional[bytes]:
        """Read file content, None if the file does not exist yet"""
        try:
            return Path(file_path).read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            print(f"Error reading file {file_path}: {e}")
            return None

    def write_file(self, file_path: str, content: bytes, language: str) -> bool:
        """Write content to file, returning False when it was already up to date"""
        if self.read_file(file_path) == content:
            return False

        path = Path(file_path)
        tmp_name = None
        replaced = False
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Replace atomically so an interrupted run never leaves half a file
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix='.tmp')
            with os.fdopen(fd, 'wb') as f:
                f.write(content)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
            replaced = True
            return True
        except OSError as e:
            raise PersistenceError(language, file_path, str(e)) from e
        finally:
            # Also runs on KeyboardInterrupt
            if not replaced and tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
