"""Pagination Filter - skip/limit descriptor for list and search operations.

Invariants:
    - skip >= 0 and limit >= 0 (ValueError otherwise)
    - from_page() clamps page and page_size to >= 1
    - from_page(page, size) skips exactly (page - 1) * size documents, so page 2
      of size 10 starts at the 11th document
"""

from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Filter:
    """Store-level cursor options derived from a page request."""
    skip: int = 0
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.skip < 0:
            raise ValueError(f"skip must be >= 0, got {self.skip}")
        if self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")

    @classmethod
    def from_page(
        cls, page: int = DEFAULT_PAGE, page_size: int = DEFAULT_PAGE_SIZE,
    ) -> "Filter":
        page = max(page, 1)
        page_size = max(page_size, 1)
        return cls(skip=(page - 1) * page_size, limit=page_size)
