import math

from bucketwise.schemas import AUTO_THRESHOLD_DIVISOR


def resolve_threshold(requested: int, total: int) -> int:
    """
    Effective bucket size limit.

    An explicit positive request wins; otherwise 10% of the file count,
    rounded up. An empty directory resolves to 0, which the splitter and
    combiner treat as "leave the table alone".
    """
    if requested and requested > 0:
        return int(requested)
    return math.ceil(total / AUTO_THRESHOLD_DIVISOR)
