
def _non_negative_int(value:str) -> int:
    import argparse

    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number < 0:
        raise argparse.ArgumentTypeError("Negative limits make no sense")
    return number


def build_parser():
    import argparse
    from importlib.metadata import version as metadata_version, PackageNotFoundError
    import logging

    try:
        version = metadata_version("dirstat")
    except PackageNotFoundError:
        version = "unknown"

    parser = argparse.ArgumentParser(
        description="report sizes and file-type statistics of a directory tree, "
        "find files or words in it, or prune its empty files and directories",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=version,
    )

    loglvl_grp = parser.add_mutually_exclusive_group()
    loglvl_grp.add_argument("--verbose", "-v", dest="loglevel", action="store_const", const=logging.DEBUG)
    loglvl_grp.add_argument("--quiet", "-q", dest="loglevel", action="store_const", const=logging.WARNING)

    subparsers = parser.add_subparsers(dest="command", required=True)

    stats_parser = subparsers.add_parser(
        "stats",
        help="Print total size, file and directory counts, the largest file "
        "and a size breakdown by file extension",
    )
    stats_parser.add_argument("directory")
    stats_parser.add_argument(
        "--extension-limit",
        type=_non_negative_int,
        metavar="N",
        help="Maximum number of distinct extensions to track. Sizes of files "
        "with extensions beyond this limit still count towards the total but "
        "are not attributed to any file type. Default unlimited.",
    )
    stats_parser.add_argument(
        "--inaccessible-limit",
        type=_non_negative_int,
        metavar="N",
        help="Maximum number of inaccessible paths to list. Default unlimited.",
    )
    stats_parser.add_argument(
        "--report",
        default=True,
        action=argparse.BooleanOptionalAction,
        help="Whether to print the detailed report to stdout. With --no-report "
        "only the log summary is produced.",
    )

    find_parser = subparsers.add_parser(
        "find",
        help="Print the absolute path of every file with exactly this name",
    )
    find_parser.add_argument("directory")
    find_parser.add_argument("name")

    word_parser = subparsers.add_parser(
        "word",
        help="Print each file containing WORD and the number of (possibly "
        "overlapping) occurrences in it",
    )
    word_parser.add_argument("directory")
    word_parser.add_argument("word")

    prune_parser = subparsers.add_parser(
        "prune",
        help="Delete empty files, then any directories left empty, bottom-up",
    )
    prune_parser.add_argument("directory")
    prune_parser.add_argument(
        "--dry-run",
        default=False,
        action=argparse.BooleanOptionalAction,
        help="Don't actually delete anything, but print what would be deleted.",
    )

    return parser


def main(argv=None) -> int:
    import logging

    from dirstat import analyze_directory
    from dirstat.fs import DirstatError, find_file, find_word, prune_empty

    parsed = vars(build_parser().parse_args(argv))

    loglevel = parsed.pop("loglevel", None)
    if loglevel is None:
        loglevel = logging.INFO

    logging.basicConfig(
        level=loglevel,
        format="%(asctime)s:%(levelname)s:%(name)s: %(message)s",
    )
    logger = logging.getLogger("dirstat")

    command = parsed.pop("command")
    try:
        if command == "stats":
            analyze_directory(**parsed)
            return 0
        elif command == "find":
            found = find_file(parsed["directory"], parsed["name"])
        elif command == "word":
            found = find_word(parsed["directory"], parsed["word"])
        elif command == "prune":
            found = prune_empty(parsed["directory"], dry_run=parsed["dry_run"])
            if not found:
                logger.info("nothing to remove")
        else:
            raise AssertionError(f"Unhandled command {command!r}")
    except (DirstatError, ValueError) as e:
        logger.error("%s", e)
        return 2

    return 0 if found else 1


if __name__ == "__main__":
    import sys
    sys.exit(main())
