from wjclean.core.models import MatchMode

MATCH_MODE_ALIASES = {
    "mod-id": MatchMode.MOD_ID,
    "file-id": MatchMode.FILE_ID,
}

MATCH_MODE_CHOICES = list(MATCH_MODE_ALIASES.keys())

MATCH_MODE_HELP_TEXT = (
    "How archives are matched against active modlists (with --orphans):\n"
    f"  mod-id   : {MatchMode.MOD_ID.description}\n"
    f"  file-id  : {MatchMode.FILE_ID.description}\n"
    "Default: mod-id"
)

MODLISTS_HELP_TEXT = (
    "Active modlists for --orphans (space separated):\n"
    "  all            : every .wabbajack file in the library root (default)\n"
    "  1 3            : modlists by number, as listed in the report\n"
    "  \"Living Skyrim\" : modlists by name (case-insensitive)"
)

DUPLICATE_CONFIRM_ANSWERS = ("y", "yes")
ORPHAN_CONFIRM_WORD = "DELETE"

EPILOG_TEXT = """
Examples:
  Find old versions of mods in every game folder of the library
  %(prog)s -i D:\\Wabbajack\\downloads

  Only look at some game folders
  %(prog)s -i ~/wabbajack/downloads -f "Skyrim Special Edition" "Fallout 4"

  Move old versions to trash (with confirmation prompt)
  %(prog)s -i ~/wabbajack/downloads --clean

  Same as above but move files into a backup folder, only files of 5MB and more
  %(prog)s -i ~/wabbajack/downloads --clean --backup-dir ~/wj-backup --min-size 5MB

  Find archives not used by modlists 1 and 2, matching exact files
  %(prog)s -i ~/wabbajack/downloads --orphans -l 1 2 --match file-id

  Remove orphaned archives without confirmation (for scripts)
  %(prog)s -i ~/wabbajack/downloads --orphans --clean --force > report.txt

  Show archive count and size per game
  %(prog)s -i ~/wabbajack/downloads --stats
"""
