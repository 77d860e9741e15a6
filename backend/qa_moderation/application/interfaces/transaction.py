"""Transaction port — scopes a group of writes so they land together or not at all."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class Transaction(ABC):

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Async context manager; writes made inside it are undone if the block raises."""
        ...
