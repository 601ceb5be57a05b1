from datetime import datetime
from typing import Optional

from humanfriendly import format_number, format_size
from humanfriendly.tables import format_pretty_table

from dirstat.stats import DirectoryStatistics


RULE = "═" * 39


def _heading(title:str) -> list[str]:
    return [title, "-" * len(title)]


def _percentage(size:int, total:int) -> float:
    if not total:
        return 0.0
    return size / total * 100


def format_report(
    stats:DirectoryStatistics,
    directory_path:str,
    analysis_date:Optional[datetime]=None,
) -> str:
    """
    Render a detailed, human-readable report for a finished statistics walk.

    Note this sorts stats' extension list in place (ascending by size).

    Sizes are human-scaled by humanfriendly in binary units (KiB, MiB, ...)
    with up to two decimals, trailing zeros dropped, rather than a fixed
    two-decimal B/KB/MB rendering.
    """
    if analysis_date is None:
        analysis_date = datetime.now()

    lines = [
        RULE,
        "    Directory Analysis Results",
        RULE,
        f"Directory: {directory_path}",
        f"Analysis Date: {analysis_date:%Y-%m-%d %H:%M:%S}",
        "",
        *_heading("SUMMARY:"),
        "Total Size: {} ({} bytes)".format(
            format_size(stats.total_size, binary=True),
            format_number(stats.total_size),
        ),
        f"Files: {format_number(stats.file_count)}",
        f"Directories: {format_number(stats.directory_count)}",
        f"Inaccessible: {format_number(stats.inaccessible_count)}",
        "",
    ]

    if stats.largest_file_size > 0:
        lines += [
            *_heading("LARGEST FILE:"),
            f"Size: {format_size(stats.largest_file_size, binary=True)}",
            f"File: {stats.largest_file_name}",
            "",
        ]

    if stats.extension_count > 0:
        stats.sort_extensions_by_size()
        lines += [
            *_heading("SIZE BY FILE TYPE:"),
            format_pretty_table(
                [
                    [
                        es.label,
                        format_size(es.size, binary=True),
                        "%5.1f%%" % _percentage(es.size, stats.total_size),
                    ]
                    for es in stats.extension_sizes
                ],
                column_names=["Type", "Size", "Share"],
            ),
            "",
        ]

    if stats.inaccessible_paths:
        lines += [
            *_heading("INACCESSIBLE PATHS:"),
            *stats.inaccessible_paths,
            "",
        ]

    lines.append(RULE)
    return "\n".join(lines)
