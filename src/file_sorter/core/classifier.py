"""Extension based classification of file names."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.config import CategoryRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationMatch:
    """The winning rule and the exact suffix that selected it."""
    rule: CategoryRule
    extension: str

    @property
    def category(self) -> str:
        return self.rule.name


class ExtensionClassifier:
    """Map a file name to the first category whose extension list matches.

    Matching is a plain, case-sensitive suffix test with no extension
    boundary parsing: "backup.tar.gz" matches ".gz" and "clip.mp4.txt" is
    text, not video.
    """

    def __init__(self, rules: Iterable[CategoryRule]):
        self.rules: Tuple[CategoryRule, ...] = tuple(rules)

    def classify(self, filename: str) -> Optional[ClassificationMatch]:
        """Return the first (rule, extension) match for filename, or None."""
        for rule in self.rules:
            logger.debug(f"Searching files with {list(rule.extensions)}")
            for ext in rule.extensions:
                if ext and filename.endswith(ext):
                    return ClassificationMatch(rule=rule, extension=ext)
        return None

    def find_duplicate_extensions(self) -> Dict[str, List[str]]:
        """Extensions listed more than once, mapped to the categories listing them.

        Only the first listing can ever match.
        """
        seen: Dict[str, List[str]] = {}
        for rule in self.rules:
            for ext in rule.extensions:
                seen.setdefault(ext, []).append(rule.name)
        return {ext: names for ext, names in seen.items() if len(names) > 1}
