"""Command-line interface for gred."""

import argparse
import logging
import os
import sys
from typing import BinaryIO, List, Mapping, TextIO

from gred.gred_exceptions import GredError, PatchParseError
from gred.gred_logging import setup_logging
from gred.gred_matcher import compile_patterns
from gred.gred_patch_applier import PatchApplier
from gred.gred_patch_parser import PatchParser
from gred.gred_scanner import GredScanner
from gred.gred_selector import select_paths
from gred.gred_settings import GredSettings
from gred.gred_types import PatchParseStatus


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2

EXAMPLES = """
Search:
    (GRED or GREDX must select the files to search)
    GRED='*.glob' gred '<[^>]+>'
    GRED=./path/to/file gred -- -p     (-- lets you search for "-p")
    GREDX=.foo.bar gred foo            (search *.foo and *.bar files)
    GREDX=. gred regexp1 regexp2       (GREDX=. matches all files)

Patch:
    GRED=. gred foobar > gred.out
    vim gred.out
    gred -p < gred.out
"""


class Colors:
    """ANSI color codes for terminal output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'

    @classmethod
    def disable(cls) -> None:
        """Disable colors (for non-terminal output)."""
        cls.RESET = ''
        cls.BOLD = ''
        cls.RED = ''
        cls.GREEN = ''
        cls.YELLOW = ''


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='gred',
        description="Search files for regular expressions, then patch edited matches back",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EXAMPLES
    )

    parser.add_argument(
        'patterns',
        nargs='*',
        metavar='PATTERN',
        help='Regular expressions to search for (scan mode)'
    )

    parser.add_argument(
        '-p', '--patch',
        action='store_true',
        help='Patch mode: read edited gred match output from stdin'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show a summary after scanning or patching'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored diagnostics'
    )

    return parser


class GredCommand:
    """
    Main gred application.

    Coordinates:
    - Selecting files from the environment
    - Scanning them and writing match output
    - Reading edited match output
    - Applying each file's edits
    """

    def __init__(
        self,
        args: argparse.Namespace,
        settings: GredSettings,
        stdin: BinaryIO | None = None,
        stdout: BinaryIO | None = None,
        stderr: TextIO | None = None
    ):
        """
        Initialize the command.

        Args:
            args: Parsed command-line arguments
            settings: Settings read from the environment
            stdin: Binary stream patch input is read from
            stdout: Binary stream results are written to
            stderr: Text stream diagnostics are written to
        """
        self.args = args
        self.settings = settings
        self.verbose = args.verbose
        self._stdin = stdin if stdin is not None else sys.stdin.buffer
        self._stdout = stdout if stdout is not None else sys.stdout.buffer
        self._stderr = stderr if stderr is not None else sys.stderr
        self._logger = logging.getLogger("GredCommand")

        # Disable colors if not in terminal or if explicitly disabled
        if not self._stderr.isatty() or args.no_color:
            Colors.disable()

    def run(self) -> int:
        """
        Run the command.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        try:
            if self.args.patch:
                return self._patch()

            return self._scan()

        except KeyboardInterrupt:
            self._print_error("interrupted by user")
            return 130

    def _scan(self) -> int:
        """Scan the selected files and write match output."""
        if not self.args.patterns or not self.settings.has_selection():
            self._print_usage()
            return EXIT_USAGE

        try:
            patterns = compile_patterns(self.args.patterns)
            paths = select_paths(self.settings)
            scanner = GredScanner(patterns, self._stdout)
            summary = scanner.scan_paths(paths)

        except GredError as e:
            self._logger.error("Scan failed: %s", e)
            self._print_error(str(e))
            return EXIT_ERROR

        self._print_verbose(
            f"{summary.lines_emitted} line(s) in {summary.files_matched} of "
            f"{summary.files_scanned} file(s)"
        )
        return EXIT_OK

    def _patch(self) -> int:
        """Read edited match output and apply it file by file."""
        if self.args.patterns:
            self._print_usage()
            return EXIT_USAGE

        try:
            result = PatchParser().parse(self._stdin)

        except PatchParseError as e:
            self._logger.error("Patch input rejected: %s", e)
            self._print_error(str(e))
            return EXIT_ERROR

        if result.status is PatchParseStatus.NO_INPUT:
            self._print_usage()
            return EXIT_USAGE

        if result.status is PatchParseStatus.NO_CHANGES:
            self._print_warning("stdin patches included no changes and were ignored")
            return EXIT_OK

        applied = 0
        for outcome in PatchApplier().apply_all(result.groups):
            if not outcome.success:
                self._print_warning(outcome.message)
                continue

            applied += 1
            self._stdout.write(f"{outcome.path} {outcome.lines_applied}\n".encode('utf-8', errors='surrogateescape'))

        self._stdout.flush()
        self._print_verbose(f"patched {applied} of {len(result.groups)} file(s)")
        return EXIT_OK

    def _print_usage(self) -> None:
        """Print usage help."""
        build_parser().print_help(self._stderr)

    def _print_error(self, message: str) -> None:
        """Print error message."""
        print(f"{Colors.RED}error:{Colors.RESET} {message}", file=self._stderr)

    def _print_warning(self, message: str) -> None:
        """Print warning message."""
        print(f"{Colors.YELLOW}warning:{Colors.RESET} {message}", file=self._stderr)

    def _print_verbose(self, message: str) -> None:
        """Print verbose message."""
        if self.verbose:
            print(f"{Colors.GREEN}[verbose]{Colors.RESET} {message}", file=self._stderr)


def main(argv: List[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments, without the program name
        environ: Environment mapping, defaults to os.environ

    Returns:
        Exit code
    """
    args = build_parser().parse_args(argv)

    try:
        settings = GredSettings.from_environ(os.environ if environ is None else environ)

    except GredError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    setup_logging(settings)

    return GredCommand(args, settings).run()
