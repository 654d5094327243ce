"""Validate, publish and check every discovered definition."""

from typing import List, Optional, Sequence, Type

from ..definitions import DefinitionBase
from ..errors import NoDefinitionsFoundError
from ..helpers.logger import get_logger
from .change_detector import classify, fingerprint
from .discovery import discover_definitions
from .loader import LoaderConfig, ModuleLoader, TypeCatalog
from .models import DefinitionResult, PublishOutcome, RunResult, ValidationResult

logger = get_logger("publishing.orchestrator")

VERBOSITY_HINT = "To see exception details, run with --log-level DEBUG"


class PublishOrchestrator:
    """
    Publish definitions one at a time, in discovery order.

    A definition that cannot resolve its path, fails validation or fails to
    publish is recorded and skipped; the others are still published.
    """

    def __init__(self, fail_if_changed: bool = False):
        self.fail_if_changed = fail_if_changed

    def run(self, definitions: Sequence[DefinitionBase]) -> RunResult:
        """Publish all definitions and return the aggregated result."""
        if not definitions:
            raise NoDefinitionsFoundError("No pipeline definitions found to publish")

        result = RunResult(fail_if_changed=self.fail_if_changed)
        for definition in definitions:
            result.results.append(self.publish_definition(definition))
        return result

    def publish_definition(self, definition: DefinitionBase) -> DefinitionResult:
        name = type(definition).__name__

        path, error = _resolve_target_path(definition, name)
        if path is None:
            return DefinitionResult(name, PublishOutcome.PUBLISH_ERROR, error=error)

        logger.info(f"{name}:")
        logger.info("  Validating pipeline...")

        error = _validate(definition, name)
        if error is not None:
            return DefinitionResult(
                name, PublishOutcome.VALIDATION_FAILED, target_path=path, error=error
            )

        try:
            before = fingerprint(path)
        except OSError as e:
            return _fingerprint_error(name, path, e)

        try:
            definition.publish()
        except Exception as e:
            logger.error(f"  Publishing of pipeline {name} to {path} failed: {e}")
            logger.debug(f"Publishing of pipeline {name} failed", exc_info=True)
            return DefinitionResult(
                name, PublishOutcome.PUBLISH_ERROR, target_path=path, error=str(e)
            )

        try:
            after = fingerprint(path)
        except OSError as e:
            return _fingerprint_error(name, path, e)

        outcome = classify(before, after)
        self._report(name, path, outcome)
        return DefinitionResult(name, outcome, target_path=path)

    def _report(self, name: str, path: str, outcome: PublishOutcome) -> None:
        if outcome == PublishOutcome.CREATED:
            if self.fail_if_changed:
                logger.error("  This pipeline hasn't been published yet!")
            else:
                logger.info(f"  {name} created at {path}")
        elif outcome == PublishOutcome.UNCHANGED:
            logger.info("  No new changes to publish")
        elif self.fail_if_changed:
            logger.error(f"  Changes detected between {name} and {path}!")
        else:
            logger.info(f"  Published new changes to {path}")


def _resolve_target_path(definition: DefinitionBase, name: str):
    try:
        path = definition.get_target_path()
    except Exception as e:
        logger.error(f"Failed to get target path for {name}: {e}")
        logger.debug(f"Failed to get target path for {name}", exc_info=True)
        return None, str(e)

    if not path:
        logger.error(f"Failed to get target path for {name}")
        return None, "target path is empty"

    return str(path), None


def _fingerprint_error(name: str, path: str, error: OSError) -> DefinitionResult:
    logger.error(f"  Failed to read {path} for pipeline {name}: {error}")
    logger.debug(f"Failed to read {path} for pipeline {name}", exc_info=True)
    return DefinitionResult(
        name, PublishOutcome.PUBLISH_ERROR, target_path=path, error=str(error)
    )


def _validate(definition: DefinitionBase, name: str) -> Optional[str]:
    try:
        definition.validate()
    except Exception as e:
        logger.error(f"Validation of pipeline {name} failed: {e}\n{VERBOSITY_HINT}")
        logger.debug(f"Validation of pipeline {name} failed", exc_info=True)
        return str(e) or type(e).__name__
    return None


def validate_definitions(definitions: Sequence[DefinitionBase]) -> List[ValidationResult]:
    """Validate definitions without writing anything."""
    if not definitions:
        raise NoDefinitionsFoundError("No pipeline definitions found to validate")

    results = []
    for definition in definitions:
        name = type(definition).__name__
        path, error = _resolve_target_path(definition, name)
        if path is not None:
            logger.info(f"{name}:")
            logger.info("  Validating pipeline...")
            error = _validate(definition, name)
            if error is None:
                logger.info(f"  {name} is valid")
        results.append(ValidationResult(name, target_path=path, error=error))
    return results


def publish_all(
    catalog: TypeCatalog,
    fail_if_changed: bool = False,
    contract: Type = DefinitionBase,
) -> RunResult:
    """Discover the definitions in ``catalog`` and publish them."""
    definitions = discover_definitions(catalog, contract)
    return PublishOrchestrator(fail_if_changed).run(definitions)


def load_definitions(
    module_path: str, loader_config: Optional[LoaderConfig] = None
) -> List[DefinitionBase]:
    """Load the module at ``module_path`` and instantiate its definitions."""
    catalog = ModuleLoader(loader_config).load(module_path)
    return discover_definitions(catalog)
