"""
Line-level diff built on a longest-common-subsequence table.

Produces two row-aligned lists of lines (left and right) suitable for a
side-by-side view: wherever one side has no counterpart the other side gets
a placeholder row.
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List

from .validator import validate_json, format_json

logger = logging.getLogger(__name__)

SAME = 'same'
ADDED = 'added'
REMOVED = 'removed'

NO_LINE = -1


@dataclass
class DiffLine:
    """A single row on one side of the diff."""

    type: str
    line_num: int
    content: str

    @classmethod
    def placeholder(cls) -> 'DiffLine':
        return cls(SAME, NO_LINE, '')

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'lineNum': self.line_num, 'content': self.content}


@dataclass
class DiffStats:
    added: int = 0
    removed: int = 0
    # no line-level change detection; always 0
    changed: int = 0


@dataclass
class DiffResult:
    left_lines: List[DiffLine] = field(default_factory=list)
    right_lines: List[DiffLine] = field(default_factory=list)
    stats: DiffStats = field(default_factory=DiffStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'leftLines': [line.to_dict() for line in self.left_lines],
            'rightLines': [line.to_dict() for line in self.right_lines],
            'stats': asdict(self.stats)
        }


def compute_lcs(a: List[str], b: List[str]) -> List[str]:
    """
    Longest common subsequence of two line lists.

    Backtracking prefers moving up the table (dropping a left line) when
    both directions keep an optimal length.
    """
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    result: List[str] = []
    i, j = m, n
    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            result.append(a[i - 1])
            i -= 1
            j -= 1
        elif dp[i - 1][j] >= dp[i][j - 1]:
            i -= 1
        else:
            j -= 1

    result.reverse()
    return result


def compute_diff(left: str, right: str) -> DiffResult:
    """
    Diff two texts line by line.

    Args:
        left: Original text
        right: Changed text

    Returns:
        DiffResult whose left_lines and right_lines always have equal length
    """
    left_lines = left.split('\n')
    right_lines = right.split('\n')
    lcs = compute_lcs(left_lines, right_lines)
    logger.debug("Diffing %d against %d lines, %d in common",
                 len(left_lines), len(right_lines), len(lcs))

    diff = DiffResult()

    def removed(index: int) -> None:
        diff.left_lines.append(DiffLine(REMOVED, index + 1, left_lines[index]))
        diff.right_lines.append(DiffLine.placeholder())
        diff.stats.removed += 1

    def added(index: int) -> None:
        diff.right_lines.append(DiffLine(ADDED, index + 1, right_lines[index]))
        diff.left_lines.append(DiffLine.placeholder())
        diff.stats.added += 1

    li = ri = 0
    for anchor in lcs:
        while left_lines[li] != anchor:
            removed(li)
            li += 1
        while right_lines[ri] != anchor:
            added(ri)
            ri += 1
        diff.left_lines.append(DiffLine(SAME, li + 1, left_lines[li]))
        diff.right_lines.append(DiffLine(SAME, ri + 1, right_lines[ri]))
        li += 1
        ri += 1

    while li < len(left_lines):
        removed(li)
        li += 1
    while ri < len(right_lines):
        added(ri)
        ri += 1

    return diff


def compute_json_diff(left_text: str, right_text: str) -> Dict[str, Any]:
    """
    Diff two JSON documents after normalizing both to two-space indentation.

    Returns:
        Dict with 'success' plus the diff rows and stats, or an 'error'
    """
    left = validate_json(left_text)
    if not left.valid:
        return {'success': False, 'error': 'Left input is not valid JSON'}
    right = validate_json(right_text)
    if not right.valid:
        return {'success': False, 'error': 'Right input is not valid JSON'}

    diff = compute_diff(format_json(left.parsed, 2), format_json(right.parsed, 2))
    response = diff.to_dict()
    response['success'] = True
    return response
