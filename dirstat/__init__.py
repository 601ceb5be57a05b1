import logging
from typing import Optional

from humanfriendly import format_size

from dirstat.fs import (
    AccessDeniedError,
    DirstatError,
    InvalidPathError,
    compute_statistics,
    find_file,
    find_word,
    prune_empty,
)
from dirstat.report import format_report
from dirstat.stats import DirectoryStatistics

logger = logging.getLogger(__name__)


def analyze_directory(
    directory:str,
    extension_limit:Optional[int]=None,
    inaccessible_limit:Optional[int]=None,
    report:bool=True,
) -> DirectoryStatistics:
    logger.info("analyzing %s", directory)
    stats = compute_statistics(
        directory,
        extension_limit=extension_limit,
        inaccessible_limit=inaccessible_limit,
    )

    logger.info(
        "found %(files)s files in %(dirs)s directories, total size %(size)s",
        {
            "files": stats.file_count,
            "dirs": stats.directory_count,
            "size": format_size(stats.total_size, binary=True),
        },
    )

    if stats.inaccessible_count or stats.dropped_inaccessible_count:
        logger.warning(
            "%(count)s paths could not be read and are excluded from the totals",
            {"count": stats.inaccessible_count + stats.dropped_inaccessible_count},
        )
    if stats.dropped_inaccessible_count:
        logger.warning(
            "inaccessible path limit of %(limit)s reached, %(count)s paths not listed",
            {
                "limit": stats.inaccessible_limit,
                "count": stats.dropped_inaccessible_count,
            },
        )
    if stats.dropped_extension_size:
        logger.warning(
            "extension limit of %(limit)s reached, %(size)s not attributed to any file type",
            {
                "limit": stats.extension_limit,
                "size": format_size(stats.dropped_extension_size, binary=True),
            },
        )

    if report:
        print(format_report(stats, directory))

    return stats
