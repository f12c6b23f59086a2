from typing import Dict, Iterable, Optional

from menu_catalog.schemas import Category, Translation
from menu_catalog.services.category import CategoryRepository
from menu_catalog.utils.const import Languages
from menu_catalog.utils.enums import EditorState
from menu_catalog.utils.exceptions import EditorClosedError
from menu_catalog.utils.log import setup_logging

logger = setup_logging()


class EditorSession:
    """
    Draft state of one create-or-edit workflow.

    The session only remembers the target's id; the repository stays the
    owner of category data and the source of truth after a commit.
    """

    NEW = 'new'

    def __init__(self, existing: Optional[Category] = None, languages: Iterable[str] = Languages.DEFAULT):
        self._target_id = existing.id if existing else None
        self._draft = existing.name if existing else Translation()
        self._is_active = existing.is_active if existing else True
        self._languages = tuple(languages)
        self._state = EditorState.OPEN

    @classmethod
    def open(cls, existing: Optional[Category] = None, languages: Optional[Iterable[str]] = None) -> "EditorSession":
        """
        Start editing ``existing``, or a new category when it is None.

        :param existing: The category to edit.
        :param languages: Language codes offered by the form.
        """
        return cls(existing, languages or Languages.DEFAULT)

    @property
    def target(self) -> str:
        return self.NEW if self._target_id is None else self._target_id

    @property
    def target_id(self) -> Optional[str]:
        return self._target_id

    @property
    def is_new(self) -> bool:
        return self._target_id is None

    @property
    def draft(self) -> Translation:
        return self._draft

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def state(self) -> str:
        return self._state

    @property
    def languages(self) -> tuple:
        return self._languages

    def _ensure_open(self) -> None:
        if self._state != EditorState.OPEN:
            raise EditorClosedError(f"Editor session is {self._state}.")

    def fields(self) -> Dict[str, str]:
        """
        Draft text for each form language, empty when not set.
        """
        return {language_code: self._draft.get(language_code) for language_code in self._languages}

    def set_field(self, language_code: str, text: str) -> Translation:
        self._ensure_open()
        self._draft = self._draft.with_text(language_code, text)
        return self._draft

    def set_active(self, is_active: bool) -> None:
        self._ensure_open()
        self._is_active = is_active

    async def commit(self, repository: CategoryRepository) -> Category:
        """
        Hand the draft to the repository.

        Errors from the repository propagate and leave the session open, so
        the same draft can be submitted again.

        :param repository: The repository owning the target category.
        :return: The created or updated category.
        """
        self._ensure_open()
        self._state = EditorState.COMMITTING
        committed = False
        try:
            if self.is_new:
                category = await repository.create(self._draft, self._is_active)
            else:
                category = await repository.update(self._target_id, self._draft, self._is_active)
            committed = True
        finally:
            self._state = EditorState.COMMITTED if committed else EditorState.OPEN

        logger.debug(f"Editor session for {self.target} committed.")
        return category

    def cancel(self) -> None:
        """
        Discard the draft. Allowed only before a commit is issued.
        """
        if self._state == EditorState.CANCELLED:
            return
        if self._state != EditorState.OPEN:
            raise EditorClosedError(f"Cannot cancel an editor session that is {self._state}.")

        self._draft = Translation()
        self._state = EditorState.CANCELLED
