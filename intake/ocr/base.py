"""Abstract base class for optical text recognition backends."""
from abc import ABC, abstractmethod


class TextRecognizer(ABC):
    """Detects text in uploaded images."""

    name: str = "ocr"

    @abstractmethod
    async def recognize_text(self, data: bytes) -> str:
        """
        Run text detection on raw image bytes.

        Args:
            data: Encoded image (PNG, JPEG, ...)

        Returns:
            Full text of the primary annotation, or an empty string if none was found

        Raises:
            AcquisitionTimeoutError: the backend exceeded its time budget
            AcquisitionError: the backend call failed
        """
        pass
