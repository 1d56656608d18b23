#!/usr/bin/env python3
"""
wjclean CLI — command line interface for cleaning a Wabbajack downloads library.
Finds old versions of mods and archives no modlist uses any more.
Nothing is removed without --clean; removal goes to the system trash or a backup folder.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import Dict, List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
try:
    from send2trash import send2trash
except ImportError:
    print("❌ Missing required dependency:", file=sys.stderr)
    print("   pip install send2trash", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from wjclean.core.exceptions import FolderReadError
from wjclean.core.models import (
    CleanupParams, DeletionResult, DuplicateReport, ModlistInfo, UsageReport, LibraryStats)
from wjclean.core.scanner import FolderScannerImpl
from wjclean.commands import DuplicateScanCommand, OrphanScanCommand, LibraryStatsCommand
from wjclean.utils.convert_utils import ConvertUtils
from wjclean.services.cleanup_service import DuplicateService, OrphanService
from wjclean.aliases import (
    MATCH_MODE_ALIASES, MATCH_MODE_CHOICES, MATCH_MODE_HELP_TEXT, MODLISTS_HELP_TEXT,
    DUPLICATE_CONFIRM_ANSWERS, ORPHAN_CONFIRM_WORD, EPILOG_TEXT
)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s"


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.scanner = FolderScannerImpl()

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="wjclean",
            description="wjclean — Wabbajack downloads library cleaner",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            default=".",
            type=str,
            help="Library root with game folders and .wabbajack files. Default: current directory"
        )
        parser.add_argument(
            "--folders", "-f",
            nargs="+",
            default=[],
            type=str,
            metavar='',
            help="Game folders (space separated) to restrict the scan to. Default: all"
        )

        # Modes
        mode = parser.add_mutually_exclusive_group()
        mode.add_argument(
            "--orphans",
            action="store_true",
            help="Find archives not used by any active modlist (instead of old versions)"
        )
        mode.add_argument(
            "--stats",
            action="store_true",
            help="Show archive count and size per game folder"
        )

        parser.add_argument(
            "--modlists", "-l",
            nargs="+",
            default=["all"],
            type=str,
            metavar='',
            help=MODLISTS_HELP_TEXT
        )
        parser.add_argument(
            "--match",
            choices=MATCH_MODE_CHOICES,
            default="mod-id",
            type=str,
            help=MATCH_MODE_HELP_TEXT
        )

        # Actions
        parser.add_argument(
            "--clean",
            action="store_true",
            help="Remove the reported files after showing the report.\n"
                 "Files go to the system trash unless --backup-dir is given."
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --clean (for automation/scripts)"
        )
        parser.add_argument(
            "--backup-dir",
            default=None,
            type=str,
            metavar='',
            help="Move removed files into this folder instead of the trash"
        )
        parser.add_argument(
            "--min-size", "-m",
            default="0",
            type=str,
            metavar='',
            help="Only clean files at least this large (e.g., 500KB, 5MB). Default: 0"
        )

        # Output options
        parser.add_argument(
            "--log-file",
            default=None,
            type=str,
            metavar='',
            help="Write a detailed log to this file"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed progress and log messages"
        )

        return parser.parse_args(args)

    def configure_logging(self, args: argparse.Namespace) -> None:
        """Raise log verbosity and attach the optional log file."""
        root_logger = logging.getLogger()
        if args.verbose:
            root_logger.setLevel(logging.INFO)

        if args.log_file:
            try:
                handler = logging.FileHandler(args.log_file, encoding="utf-8")
            except OSError as e:
                self.error_exit(f"Cannot open log file {args.log_file}: {e}")
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root_logger.addHandler(handler)
            root_logger.setLevel(logging.DEBUG)
            # Keep the console at its own level when the root logger opens up for the file
            for existing in root_logger.handlers:
                if existing is not handler:
                    existing.setLevel(logging.INFO if args.verbose else logging.ERROR)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.clean:
            self.error_exit("--force can only be used with --clean")

        if args.clean and args.stats:
            self.error_exit("--clean cannot be used with --stats")

        # Prevent interactive confirmation in non-TTY environments
        if args.clean and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        root_path = Path(args.input).resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.input}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.input}")

        if args.backup_dir:
            backup_path = Path(args.backup_dir).resolve()
            if backup_path.exists() and not backup_path.is_dir():
                self.error_exit(f"Backup path is not a directory: {args.backup_dir}")
            if not args.clean:
                self.warning("--backup-dir has no effect without --clean")

        if not args.orphans:
            if args.modlists != ["all"]:
                self.warning("--modlists has no effect without --orphans")
            if args.match != "mod-id":
                self.warning("--match has no effect without --orphans")

        try:
            ConvertUtils.human_to_bytes(args.min_size)
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")

    def create_params(self, args: argparse.Namespace) -> CleanupParams:
        """Create CleanupParams from CLI arguments."""
        try:
            return CleanupParams.from_human_readable(
                root_dir=str(Path(args.input).resolve()),
                min_size_str=args.min_size,
                folders=args.folders,
                modlists=args.modlists,
                match_mode=MATCH_MODE_ALIASES[args.match],
                backup_dir=str(Path(args.backup_dir).resolve()) if args.backup_dir else None,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def resolve_folders(self, params: CleanupParams) -> List[str]:
        """Game folders to scan, restricted to --folders when given."""
        try:
            folders = self.scanner.get_game_folders(params.root_dir)
        except FolderReadError as e:
            self.error_exit(str(e))

        if folders and folders[0] == params.root_dir:
            self.warning(
                f"{params.root_dir} contains {self.scanner.count_archives(params.root_dir)} archives directly. "
                "Point --input at the library root rather than a single game folder."
            )

        if not params.folders:
            return folders

        by_name = {os.path.basename(f).lower(): f for f in folders}
        selected = []
        for name in params.folders:
            folder = by_name.get(os.path.basename(name).lower())
            if folder is None:
                self.warning(f"Game folder not found: {name}")
            elif folder not in selected:
                selected.append(folder)

        if not selected:
            self.error_exit("None of the requested game folders exist")
        return selected

    # =============================
    # Duplicate scan
    # =============================

    def run_duplicates(self, params: CleanupParams, folders: List[str], clean: bool, force: bool) -> None:
        command = DuplicateScanCommand(scanner=self.scanner)
        reports, failures = command.execute_many(folders)
        for folder, error in failures:
            self.warning(str(error))

        self.output_duplicates(reports)

        if clean:
            self.execute_duplicate_cleanup(reports, params, force=force)

    def output_duplicates(self, reports: Dict[str, DuplicateReport]) -> None:
        """Print groups per game folder: [KEEP] the newest, [DEL] the rest."""
        if self.quiet:
            return

        total_groups = sum(len(r.groups) for r in reports.values())
        if not total_groups:
            print("No old mod versions found.")
            return

        for report in reports.values():
            if not report.groups:
                continue
            print(f"\n🎮 {report.folder_name} | Groups: {len(report.groups)} | "
                  f"Reclaimable: {ConvertUtils.bytes_to_human(report.total_space)}")
            print("-" * 60)
            for group in report.sorted_groups():
                print(f"📁 {group.newest.mod_name} (ModID {group.newest.mod_id}) | Files: {group.duplicate_count}")
                self._print_mod_file("[KEEP]", group.newest)
                for old in group.old_files:
                    self._print_mod_file("[DEL] ", old)
            if self.verbose:
                for rejection in report.rejections:
                    print(f"   [SKIP] {rejection.mod_key}: {rejection.reason}")
                if report.skipped_files:
                    print(f"   {report.skipped_files} files were not recognized as mod archives")

        total_old = sum(r.total_old_files for r in reports.values())
        total_space = sum(r.total_space for r in reports.values())
        print("=" * 60)
        print(f"Summary: {total_groups} mods with old versions, {total_old} old files, "
              f"{ConvertUtils.bytes_to_human(total_space)} reclaimable")

    def execute_duplicate_cleanup(self, reports: Dict[str, DuplicateReport], params: CleanupParams,
                                  force: bool = False) -> None:
        files = DuplicateService.files_to_delete(reports.values(), params.min_size_bytes)
        if not files:
            if not self.quiet:
                print("No files to clean.")
            return

        space = ConvertUtils.bytes_to_human(sum(f.size for f in files))
        if not self.confirm(
                f"Remove {len(files)} old versions ({space}) {self._destination(params)}? [y/N]: ",
                DUPLICATE_CONFIRM_ANSWERS, force):
            print("Cleanup cancelled by user.")
            return

        result = DuplicateService.delete_old_versions(
            reports.values(), backup_dir=params.backup_dir, min_size_bytes=params.min_size_bytes)
        self.output_deletion_result(result)

    # =============================
    # Orphan scan
    # =============================

    def run_orphans(self, params: CleanupParams, folders: List[str], clean: bool, force: bool) -> None:
        command = OrphanScanCommand(match_mode=params.match_mode, scanner=self.scanner)
        try:
            infos, failures = command.load_modlists(params.root_dir)
        except FolderReadError as e:
            self.error_exit(str(e))
        for path, error in failures:
            self.warning(str(error))

        if not infos:
            self.error_exit(f"No readable .wabbajack files found in {params.root_dir}")

        try:
            active = command.select_active(infos, params.modlists)
        except ValueError as e:
            self.error_exit(str(e))

        self.output_modlists(infos, active)
        report = command.execute(folders, active)
        self.output_orphans(report)

        if clean:
            self.execute_orphan_cleanup(report, params, force=force)

    def output_modlists(self, infos: List[ModlistInfo], active: List[ModlistInfo]) -> None:
        if self.quiet:
            return
        print("\nModlists:")
        for idx, info in enumerate(infos, 1):
            marker = "✅" if info in active else "  "
            details = " ".join(part for part in (info.version and f"v{info.version}",
                                                 info.author and f"by {info.author}") if part)
            print(f" {marker} {idx}. {info.name} {details} | Archives: {info.mod_count}".rstrip())

    def output_orphans(self, report: UsageReport) -> None:
        if self.quiet:
            return
        if not report.orphaned_mods:
            print(f"\nAll {report.total_count} archives are used by the active modlists.")
            return

        print(f"\nOrphaned archives ({len(report.orphaned_mods)}):")
        for orphan in sorted(report.orphaned_mods, key=lambda om: om.file.file_name.lower()):
            self._print_mod_file("[DEL] ", orphan.file)
        print("=" * 60)
        print(f"Summary: {len(report.used_mods)} used ({ConvertUtils.bytes_to_human(report.used_size)}), "
              f"{len(report.orphaned_mods)} orphaned ({ConvertUtils.bytes_to_human(report.orphaned_size)})")

    def execute_orphan_cleanup(self, report: UsageReport, params: CleanupParams, force: bool = False) -> None:
        orphans = [om for om in report.orphaned_mods if om.file.size >= params.min_size_bytes]
        if not orphans:
            if not self.quiet:
                print("No files to clean.")
            return

        space = ConvertUtils.bytes_to_human(sum(om.file.size for om in orphans))
        if not self.confirm(
                f"Remove {len(orphans)} orphaned archives ({space}) {self._destination(params)}?\n"
                f"Type {ORPHAN_CONFIRM_WORD} to confirm: ",
                (ORPHAN_CONFIRM_WORD,), force, case_sensitive=True):
            print("Cleanup cancelled by user.")
            return

        result = OrphanService.delete_orphaned_mods(
            orphans, backup_dir=params.backup_dir, min_size_bytes=params.min_size_bytes)
        self.output_deletion_result(result)

    # =============================
    # Stats
    # =============================

    def run_stats(self, folders: List[str]) -> None:
        stats = LibraryStatsCommand(scanner=self.scanner).execute(folders)
        self.output_stats(stats)

    @staticmethod
    def output_stats(stats: LibraryStats) -> None:
        print("\nLibrary statistics:")
        for folder in sorted(stats.by_game, key=lambda s: s.size, reverse=True):
            print(f"  {folder.name:<40} {folder.files:>6} files  {ConvertUtils.bytes_to_human(folder.size):>12}")
        print("=" * 60)
        print(f"  {'Total':<40} {stats.total_files:>6} files  "
              f"{ConvertUtils.bytes_to_human(stats.total_size):>12}")

    # =============================
    # Helpers
    # =============================

    def _print_mod_file(self, tag: str, mod_file) -> None:
        version = mod_file.version or "?"
        uploaded = ConvertUtils.timestamp_to_human(mod_file.timestamp)
        print(f"   {tag} {mod_file.file_name}")
        if self.verbose:
            print(f"          Version: {version} | Uploaded: {uploaded} | "
                  f"Size: {ConvertUtils.bytes_to_human(mod_file.size)}")

    @staticmethod
    def _destination(params: CleanupParams) -> str:
        return f"to {params.backup_dir}" if params.backup_dir else "to trash"

    def confirm(self, prompt: str, accepted, force: bool, case_sensitive: bool = False) -> bool:
        """Asks for confirmation unless --force was given."""
        if force:
            print("⚠️  WARNING: --force flag skips confirmation. Proceeding with cleanup...")
            return True

        # Safety check: confirm we're still in interactive mode
        if not sys.stdin.isatty() or not sys.stdout.isatty():
            self.error_exit(
                "Lost interactive terminal during operation. "
                "Use --force to proceed in non-interactive environments."
            )

        response = input(prompt).strip()
        if not case_sensitive:
            response = response.lower()
        return response in accepted

    def output_deletion_result(self, result: DeletionResult) -> None:
        for path, reason in result.skipped:
            self.warning(f"Skipped {path} ({reason})")

        if result.errors:
            print(f"\n⚠️  Partial success: {result.deleted_count} files removed.")
            print(f"Failed to remove {len(result.errors)} file(s):")
            for path, error in result.errors[:5]:  # Show first 5 errors
                print(f"  • {os.path.basename(path)}: {error.split(':')[-1].strip()}")
            if len(result.errors) > 5:
                print(f"  ...and {len(result.errors) - 5} more files")
        else:
            print(f"✅ Successfully removed {result.deleted_count} files.")
        print(f"Total space freed: {ConvertUtils.bytes_to_human(result.space_freed)}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.configure_logging(args)
        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet:
            print(f"Scanning library: {params.root_dir}")

        folders = self.resolve_folders(params)
        if not folders:
            self.error_exit(f"No game folders found in {params.root_dir}")

        if args.stats:
            self.run_stats(folders)
        elif args.orphans:
            self.run_orphans(params, folders, clean=args.clean, force=args.force)
        else:
            self.run_duplicates(params, folders, clean=args.clean, force=args.force)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
