import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

# Add project root to path to allow direct import
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from poeditor_sync.config import Config
from poeditor_sync.errors import PersistenceError, PublishError
from poeditor_sync.file_processor import FileProcessor


class TestFileProcessor(unittest.TestCase):

    def setUp(self):
        """Set up a config pointing at a temporary locale directory."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.locale_dir = Path(self.temp_dir.name) / 'locale'
        with patch.dict(os.environ, {}, clear=True):
            self.config = Config(api_token='token', project_id='42', locale_dir=str(self.locale_dir))
        self.file_processor = FileProcessor(self.config)

    def tearDown(self):
        """Clean up temporary files after tests."""
        self.temp_dir.cleanup()

    def test_get_output_path(self):
        test_cases = {
            'en': self.locale_dir / 'en.json',
            'fr': self.locale_dir / 'fr.json',
            'pt-br': self.locale_dir / 'pt-br.json',
            'zh-Hans': self.locale_dir / 'zh-Hans.json',
        }

        for language, expected_output in test_cases.items():
            with self.subTest(language=language):
                self.assertEqual(self.file_processor.get_output_path(language), str(expected_output))

    def test_get_output_path_is_deterministic_and_collision_free(self):
        languages = ['en', 'en-us', 'en_us', 'fr', 'fr-ca']
        paths = [self.file_processor.get_output_path(lang) for lang in languages]

        self.assertEqual(paths, [self.file_processor.get_output_path(lang) for lang in languages])
        self.assertEqual(len(set(paths)), len(languages))

    def test_get_output_path_rejects_unsafe_codes(self):
        for language in ['', '../etc/passwd', 'en/../../x', '.hidden', 'a\\b', 'en/us']:
            with self.subTest(language=language):
                with self.assertRaises(PublishError):
                    self.file_processor.get_output_path(language)

    def test_write_file_passes_bytes_through(self):
        path = self.file_processor.get_output_path('fr')
        content = b'{\n    "hello": "Bonjour",\n    "quote": "\\u00ab oui \\u00bb"\n}'

        changed = self.file_processor.write_file(path, content, 'fr')

        self.assertTrue(changed)
        self.assertEqual(Path(path).read_bytes(), content)

    def test_write_file_creates_locale_directory(self):
        self.assertFalse(self.locale_dir.exists())

        self.file_processor.write_file(self.file_processor.get_output_path('en'), b'{}', 'en')

        self.assertTrue(self.locale_dir.is_dir())

    def test_write_file_unchanged_content(self):
        path = self.file_processor.get_output_path('en')

        self.assertTrue(self.file_processor.write_file(path, b'{"hello":"Hello"}', 'en'))
        self.assertFalse(self.file_processor.write_file(path, b'{"hello":"Hello"}', 'en'))
        self.assertTrue(self.file_processor.write_file(path, b'{"hello":"Hi"}', 'en'))
        self.assertEqual(Path(path).read_bytes(), b'{"hello":"Hi"}')

    def test_write_file_leaves_no_temporary_files(self):
        path = self.file_processor.get_output_path('en')
        self.file_processor.write_file(path, b'{}', 'en')

        self.assertEqual(os.listdir(self.locale_dir), ['en.json'])

    def test_write_file_failure(self):
        path = self.file_processor.get_output_path('en')

        with patch('poeditor_sync.file_processor.os.replace', side_effect=PermissionError('denied')):
            with self.assertRaises(PersistenceError) as ctx:
                self.file_processor.write_file(path, b'{}', 'en')

        self.assertEqual(ctx.exception.language, 'en')
        self.assertEqual(ctx.exception.path, path)
        self.assertFalse(os.path.exists(path))
        self.assertEqual(os.listdir(self.locale_dir), [])

    def test_write_file_interrupted_leaves_no_temporary_file(self):
        path = self.file_processor.get_output_path('en')

        with patch('poeditor_sync.file_processor.os.replace', side_effect=KeyboardInterrupt):
            with self.assertRaises(KeyboardInterrupt):
                self.file_processor.write_file(path, b'{}', 'en')

        self.assertEqual(os.listdir(self.locale_dir), [])

    def test_read_file_missing(self):
        self.assertIsNone(self.file_processor.read_file(str(self.locale_dir / 'missing.json')))


if __name__ == '__main__':
    unittest.main()
