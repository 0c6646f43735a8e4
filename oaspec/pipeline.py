"""ValidationPipeline orchestrator for oaspec.

The pipeline runs a fixed, ordered set of rule validators over one Document
and merges their results into a single report. Validators are independent
pure reads, so they may run concurrently on a thread pool; results are always
merged in registration order, which keeps the report deterministic.

Usage:
    >>> from oaspec.document import Document
    >>> from oaspec.pipeline import validate
    >>> report = validate(Document.from_dict({"paths": {"/pets": {"get": {}}}}))
    >>> report.is_valid
    False
    >>> "OPERATION-002" in report.codes()
    True
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from oaspec.document import Document
from oaspec.validation import ValidationResult
from oaspec.validators import (
    OperationValidator,
    ParameterValidator,
    PathValidator,
    RequestBodyValidator,
    ResponseValidator,
    SchemaValidator,
    ServerValidator,
    SpecValidator,
)

logger = logging.getLogger(__name__)


def default_validators() -> List[SpecValidator]:
    """The seven rule validators, in report order."""
    return [
        PathValidator(),
        SchemaValidator(),
        RequestBodyValidator(),
        ResponseValidator(),
        OperationValidator(),
        ServerValidator(),
        ParameterValidator(),
    ]


class ValidationPipeline:
    """Runs every registered validator and concatenates their issues.

    Attributes:
        validators: Validators in registration (and report) order
        max_workers: When greater than 1, validators run on a thread pool of
            this size; otherwise they run one after another

    Examples:
        >>> pipeline = ValidationPipeline()
        >>> len(pipeline.validators)
        7
        >>> pipeline.validate(None).error_count
        7
    """

    def __init__(
        self,
        validators: Optional[Iterable[SpecValidator]] = None,
        max_workers: Optional[int] = None,
    ):
        """Initialize the pipeline.

        Args:
            validators: Validators to run (defaults to default_validators())
            max_workers: Thread pool size for concurrent fan-out
        """
        self.validators: List[SpecValidator] = (
            list(validators) if validators is not None else default_validators()
        )
        self.max_workers = max_workers

    def add_validator(self, validator: SpecValidator) -> "ValidationPipeline":
        """Register one more validator at the end of the run order."""
        self.validators.append(validator)
        return self

    def validate(self, document: Optional[Document]) -> ValidationResult:
        """Validate ``document`` with every registered validator.

        The document must not be mutated while this runs.

        Returns:
            One ValidationResult holding every validator's errors and
            warnings, verbatim and in registration order
        """
        if self.max_workers is not None and self.max_workers > 1 and len(self.validators) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                partials = list(executor.map(lambda v: v.validate(document), self.validators))
        else:
            partials = [validator.validate(document) for validator in self.validators]

        report = ValidationResult()
        for partial in partials:
            report.merge(partial)

        logger.info(
            "Validation finished: %d error(s), %d warning(s)",
            report.error_count,
            report.warning_count,
        )
        return report


def validate(document: Optional[Document], max_workers: Optional[int] = None) -> ValidationResult:
    """Validate ``document`` with the default validator set."""
    return ValidationPipeline(max_workers=max_workers).validate(document)


__all__ = [
    "default_validators",
    "ValidationPipeline",
    "validate",
]
