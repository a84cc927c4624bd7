import logging
from pathlib import Path

from rulebook.config import RulebookConfig, load_config
from rulebook.errors import ResolutionError
from rulebook.rules.composer import Composer
from rulebook.rules.models import ResolvedDocument, Rule
from rulebook.rules.resolver import ReferenceResolver
from rulebook.rules.selector import select
from rulebook.rules.store import RuleStore

logger = logging.getLogger(__name__)


class RulebookService:
    """Holds the current store and answers queries against it.

    The store is never mutated; ``reload`` builds a new one and swaps the
    reference only once loading succeeded.
    """

    def __init__(self, config: RulebookConfig) -> None:
        self.config = config
        self._resolver = ReferenceResolver()
        self._composer = Composer(self._resolver)
        self._store = self._load()

    @classmethod
    def from_project(
        cls, project_root: Path, config_path: Path | None = None
    ) -> "RulebookService":
        return cls(load_config(project_root, config_path))

    @property
    def store(self) -> RuleStore:
        return self._store

    def reload(self) -> RuleStore:
        store = self._load()
        self._store = store
        logger.debug("Reloaded store with %d rules", len(store))
        return store

    def select(self, target_path: str) -> list[Rule]:
        return select(self._store, target_path)

    def compose(self, target_path: str) -> ResolvedDocument:
        return self._composer.compose(self._store, target_path)

    def check(self) -> list[ResolutionError]:
        store = self._store
        errors: list[ResolutionError] = []
        for rule in store:
            try:
                self._resolver.resolve(store, rule)
            except ResolutionError as exc:
                errors.append(exc)
        return errors

    def _load(self) -> RuleStore:
        return RuleStore.load(
            self.config.rules_dir,
            root_document=self.config.root_document,
            extensions=self.config.extensions,
            strict=self.config.strict,
        )
