"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from timesheet.domain.models.base import DomainException

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Times every execution and logs failures before passing them on unchanged.
    """

    def __init__(self):
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    @property
    def execution_time(self) -> Optional[float]:
        """Duration of the last execution in seconds."""
        if self.execution_start is None or self.execution_end is None:
            return None
        return (self.execution_end - self.execution_start).total_seconds()

    async def execute(self, request: T) -> R:
        """
        Execute the use case.
        Errors raised by validation or business logic propagate to the caller.
        """
        self.execution_start = datetime.now(timezone.utc)
        name = type(self).__name__

        try:
            await self._validate_request(request)
            result = await self._execute_business_logic(request)
        except DomainException as exc:
            self.execution_end = datetime.now(timezone.utc)
            logger.warning(f"{name} failed after {self.execution_time:.3f}s: {exc.code}: {exc.message}")
            raise
        except Exception:
            self.execution_end = datetime.now(timezone.utc)
            logger.exception(f"{name} failed after {self.execution_time:.3f}s")
            raise

        self.execution_end = datetime.now(timezone.utc)
        logger.debug(f"{name} executed in {self.execution_time:.3f}s")
        return result

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        if hasattr(request, 'validate'):
            request.validate()

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass
