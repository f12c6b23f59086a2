"""
Error taxonomy of the category catalog.

Every failure crossing a public boundary is one of these types. Nothing in
the catalog retries on its own: callers decide whether to retry, reload or
report.
"""

from typing import List, Optional, Tuple


class CatalogError(Exception):
    """
    Base class for all catalog errors.
    """


class TransportError(CatalogError):
    """
    The remote store could not be reached or rejected the request.
    """


class BatchWriteError(TransportError):
    """
    A batched order index write stopped after ``applied`` leading changes.
    """

    def __init__(self, applied: int, message: str = None):
        self.applied = applied
        super().__init__(message or f"Batch write stopped after {applied} change(s).")


class NotFoundError(CatalogError):
    """
    The operation targets a category that is not known.
    """

    def __init__(self, category_id, message: str = None):
        self.category_id = category_id
        super().__init__(message or f"Category {category_id!r} not found.")


class SyncError(CatalogError):
    """
    A single-row write or a reload failed; the snapshot is unchanged.
    """


class StaleSnapshotError(SyncError):
    """
    An ordering operation was issued while the snapshot awaits a reload.
    """


class PartialReorderError(CatalogError):
    """
    A multi-row renumber was only partially applied. The caller must reload.

    :param applied: (category id, order index) pairs that reached the store.
    """

    def __init__(self, applied: List[Tuple[str, int]], message: str = None):
        self.applied = list(applied)
        super().__init__(
            message or f"Reorder partially applied ({len(self.applied)} row(s)); reload required."
        )

    @property
    def last_applied(self) -> Optional[Tuple[str, int]]:
        return self.applied[-1] if self.applied else None


class TranslationError(CatalogError, ValueError):
    """
    A language code or a text value failed validation.
    """


class EditorClosedError(CatalogError):
    """
    The editor session was already committed or cancelled.
    """
