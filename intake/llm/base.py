"""Abstract base class for language model completion backends."""
from abc import ABC, abstractmethod
from typing import Optional


class CompletionBackend(ABC):
    """Abstract base class for structured-extraction completion calls."""

    #: Name used in logs and error context
    name: str = "llm"

    @abstractmethod
    async def complete(self, system_prompt: str, user_text: str) -> Optional[str]:
        """
        Run a single completion.

        Args:
            system_prompt: Fixed extraction instruction
            user_text: Raw text extracted from the page or image

        Returns:
            Content of the first completion, or None if the backend returned none

        Raises:
            UpstreamTimeoutError: the backend exceeded its time budget
            ModelBackendError: the backend call failed
        """
        pass
