"""Text recognition using Google Cloud Vision."""
import asyncio
import logging
from typing import Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import vision
from google.oauth2 import service_account

from intake.ocr.base import TextRecognizer
from intake.core.errors import AcquisitionError, AcquisitionTimeoutError

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"


class GoogleVisionRecognizer(TextRecognizer):
    """Google Cloud Vision text detection with service account credentials."""

    def __init__(self, project_id: str, private_key: str, client_email: str,
                 timeout: float = 30.0, client: Optional[vision.ImageAnnotatorClient] = None):
        self.project_id = project_id
        self.private_key = private_key
        self.client_email = client_email
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> vision.ImageAnnotatorClient:
        """Create the Vision client on first use."""
        if self._client is None:
            credentials = service_account.Credentials.from_service_account_info({
                "type": "service_account",
                "project_id": self.project_id,
                "private_key": self.private_key,
                "client_email": self.client_email,
                "token_uri": TOKEN_URI,
            })
            self._client = vision.ImageAnnotatorClient(credentials=credentials)
        return self._client

    async def recognize_text(self, data: bytes) -> str:
        image = vision.Image(content=data)

        try:
            # The Vision client is synchronous; keep the event loop free
            response = await asyncio.to_thread(
                self.client.text_detection, image=image, timeout=self.timeout
            )
        except google_exceptions.DeadlineExceeded as e:
            logger.error(f"Text detection timed out after {self.timeout}s: {e}")
            raise AcquisitionTimeoutError(
                f"Text detection timed out: {e}", backend=self.name
            ) from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Text detection failed: {e}")
            raise AcquisitionError(
                f"Text detection failed: {e}", backend=self.name
            ) from e

        if response.error.message:
            logger.error(f"Text detection returned an error: {response.error.message}")
            raise AcquisitionError(
                f"Text detection failed: {response.error.message}", backend=self.name
            )

        annotations = response.text_annotations
        if not annotations:
            logger.info("Text detection found no text annotations")
            return ""

        # The first annotation holds the full detected text
        return annotations[0].description or ""
