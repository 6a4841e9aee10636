#!/usr/bin/env python3

import datetime
import sys
import time
from typing import List, Optional

from poeditor_sync.config import Config
from poeditor_sync.errors import (
    AuthError, FetchError, LocalizationError, PersistenceError, PublishError
)
from poeditor_sync.file_processor import FileProcessor
from poeditor_sync.git_operations import GitOperations
from poeditor_sync.models import LanguageResult, RunReport, RunState
from poeditor_sync.poeditor import POEditorClient


# Version identifier - Update this when code changes
VERSION = "1.0.0"


def format_time(seconds: float) -> str:
    """Format time in seconds to human-readable string"""
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{int(hours)}h {int(minutes)}m {int(seconds)}s"
    elif minutes > 0:
        return f"{int(minutes)}m {int(seconds)}s"
    else:
        return f"{seconds:.1f}s"


class LocalizationWorkflow:
    """Fetches every POEditor language into locale files and publishes a PR"""

    def __init__(self, config: Config, client: Optional[POEditorClient] = None,
                 file_processor: Optional[FileProcessor] = None,
                 git_ops: Optional[GitOperations] = None,
                 today: Optional[datetime.date] = None):
        self.config = config
        self.client = client or POEditorClient(config)
        self.file_processor = file_processor or FileProcessor(config)
        self.git_ops = git_ops
        self.today = today or datetime.date.today()

        self.report = RunReport()
        self.workflow_start_time = time.monotonic()
        self.deadline = self.workflow_start_time + config.run_timeout

    @property
    def state(self) -> RunState:
        return self.report.state

    def _remaining(self) -> float:
        return self.deadline - time.monotonic()

    def _request_timeout(self) -> float:
        return max(0.001, min(self.config.request_timeout, self._remaining()))

    def enumerate_languages(self) -> List[str]:
        """Fetch the project languages, each code kept once"""
        self.report.state = RunState.ENUMERATING
        print("\n🔍 [STEP 2: ENUMERATION] Listing project languages...")

        codes = self.client.list_languages(timeout=self._request_timeout())
        languages = []
        for code in codes:
            if code in languages:
                print(f"  ⚠️ Language '{code}' reported more than once, fetching it once")
                continue
            languages.append(code)

        print(f"✅ [STEP 2: ENUMERATION] Found {len(languages)} language(s): {', '.join(languages) or '-'}")
        return languages

    def publish_language(self, language: str) -> LanguageResult:
        """Export one language and store it; per-language failures are captured"""
        result = LanguageResult(language=language)
        try:
            result.path = self.file_processor.get_output_path(language)
            url = self.client.export_url(language, timeout=self._request_timeout())
            content = self.client.download(language, url, timeout=self._request_timeout())
            result.changed = self.file_processor.write_file(result.path, content, language)
        except AuthError as e:
            result.error = f"{language}: export rejected: {e}"
            print(f"  ❌ {result.error}")
            return result
        except (PublishError, PersistenceError) as e:
            result.error = str(e)
            print(f"  ❌ {e}")
            return result

        status = "updated" if result.changed else "unchanged"
        print(f"  ✅ {language}: {result.path} ({status})")
        return result

    def publish_all(self, languages: List[str]) -> List[LanguageResult]:
        """Publish languages one after another until done or out of time"""
        self.report.state = RunState.PUBLISHING
        total = len(languages)
        print(f"\n🔄 [STEP 3: PUBLISHING] Exporting {total} language(s)...")

        # Results are recorded as they come so an aborted run still reports what was written
        self.report.results = results = []
        claimed = {}
        for i, language in enumerate(languages, 1):
            if self._remaining() <= 0:
                print(f"  ⏱️ Run timeout reached, skipping {language}")
                results.append(LanguageResult(language=language, error=f"{language}: timed out"))
                continue

            # Case-insensitive filesystems would store both codes in one file
            if (other := claimed.setdefault(language.lower(), language)) != language:
                print(f"  ❌ {language}: collides with {other}, skipping")
                results.append(LanguageResult(language=language, error=f"{language}: file name collides with {other}"))
                continue

            print(f"\n>>>>> 📄 [STEP 3.{i}: LANGUAGE] {language} ({i}/{total}) <<<<<")
            results.append(self.publish_language(language))

        return results

    def create_pull_request(self, changeset: List[str]) -> Optional[int]:
        """Hand the changed locale files to the pull request step"""
        if not self.config.create_pr:
            print("\nℹ️ [STEP 4: PULL REQUEST] Disabled by configuration.")
            return None

        if self.git_ops is None:
            self.git_ops = GitOperations(self.config)
        if not self.git_ops.in_github_actions:
            print("\nℹ️ [STEP 4: PULL REQUEST] Not running in GitHub Actions, leaving changes in the working tree.")
            return None

        branch_name = self.config.branch_name(self.today)
        print(f"\n🐙 [STEP 4: PULL REQUEST] {len(changeset)} changed file(s), branch '{branch_name}'")
        pr_number = self.git_ops.publish_changes(changeset, branch_name)
        if pr_number:
            print(f"  🔗 PR URL: {self.git_ops.github_server_url}/{self.git_ops.github_repository}/pull/{pr_number}")
        return pr_number

    def run(self) -> RunReport:
        """Run the complete sync workflow"""
        try:
            languages = self.enumerate_languages()
            self.report.languages = languages
            self.publish_all(languages)
        except (AuthError, FetchError) as e:
            self.report.state = RunState.FAILED
            self.report.error = str(e)
            print(f"❌ {e}")
            return self.report

        changeset = self.report.changeset
        if not changeset:
            print("\nℹ️ No locale file changed.")
        # An empty changeset still runs the step so a stale branch gets cleaned up
        self.report.pr_number = self.create_pull_request(changeset)

        self.report.state = RunState.DONE
        self._print_summary()
        return self.report

    def _print_summary(self) -> None:
        stats = self.client.get_statistics()
        print(f"\n🎉 [STEP 5: SUMMARY] Finished in {format_time(time.monotonic() - self.workflow_start_time)}")
        print(f"  📊 Languages attempted: {len(self.report.results)}")
        print(f"  ✅ Succeeded: {len(self.report.results) - len(self.report.failures)}")
        print(f"  📝 Files changed: {len(self.report.changeset)}")
        print(f"  🌐 API calls: {stats['api_calls']}, downloaded: {stats['downloaded_bytes']:,} bytes")
        for failure in self.report.failures:
            print(f"  ❌ {failure.error}")


def main():
    """Main entry point"""
    print(f"🚀 [STEP 1: INITIALIZATION] Starting localization update v{VERSION}...")
    try:
        config = Config()
        config.print_config()

        report = LocalizationWorkflow(config).run()

        if not report.succeeded:
            print("❌ Workflow failed.")
            sys.exit(1)

        print("✅ Workflow completed successfully.")

    except KeyboardInterrupt:
        print("\n⚠️ Interrupted, remaining languages were not fetched.")
        sys.exit(130)
    except LocalizationError as e:
        print(f"❌ Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
