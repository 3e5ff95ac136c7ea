"""Document lifecycle: session sync and validated, concurrent uploads.

Uploaded files are filtered by extension before any network call. Each
accepted file uploads on its own and reports its own start, progress and
outcome. Results only merge into the session epoch they were issued under.
"""

import asyncio
import logging
from collections.abc import Iterable

from pydantic import ValidationError

from versepoint.api.gateway import ApiGateway
from versepoint.errors import (
    ApiError,
    AuthenticationError,
    FailureReason,
    InputValidationError,
    StaleSessionError,
    VersePointError,
)
from versepoint.models.events import (
    NoticeLevel,
    UploadFailed,
    UploadProgress,
    UploadStarted,
    UploadSucceeded,
)
from versepoint.models.schemas import (
    Document,
    LoadResult,
    LocalFile,
    SubmitResult,
    document_list_adapter,
    message_list_adapter,
)
from versepoint.session.state import SessionState
from versepoint.ui.presenter import Presenter, notify, report_error

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({"pdf", "md", "html"})

DOCUMENTS_PATH = "/documents"
HISTORY_PATH = "/chat/history"
UPLOAD_PATH = "/documents/upload"


def is_supported(file: LocalFile) -> bool:
    """Check a file name against the extension allow-list (case-insensitive)."""
    return file.extension in ALLOWED_EXTENSIONS


class DocumentManager:
    """Loads and uploads documents for the current session."""

    def __init__(
        self,
        session: SessionState,
        gateway: ApiGateway,
        presenter: Presenter,
    ) -> None:
        self._session = session
        self._gateway = gateway
        self._presenter = presenter

    async def load_all(self) -> LoadResult:
        """Replace documents and transcript with the backend's copy.

        A 401/403 ends the session instead of surfacing the raw error.

        Returns:
            LoadResult with the number of documents and messages loaded.
        """
        epoch = self._session.epoch
        try:
            self._session.require_token()
            documents_payload = await self._gateway.request(DOCUMENTS_PATH)
            self._session.check_epoch(epoch, "session reload")
            history_payload = await self._gateway.request(HISTORY_PATH)
            try:
                documents = document_list_adapter.validate_python(
                    documents_payload.get("documents") or []
                )
                history = message_list_adapter.validate_python(
                    history_payload.get("chatHistory") or []
                )
            except ValidationError as e:
                raise ApiError(
                    200, f"Malformed session data from server: {e.error_count()} errors"
                ) from e
            self._session.replace_contents(documents, history, epoch)
        except ApiError as e:
            if e.is_auth_failure and self._session.epoch == epoch:
                logger.warning("Stored session was rejected by the server, logging out")
                self._session.logout()
                error = AuthenticationError(
                    "Your session has expired, please log in again",
                    FailureReason.SESSION_EXPIRED,
                )
                report_error(self._presenter, error)
                return LoadResult(success=False, reason=error.reason, error=error.message)
            report_error(self._presenter, e, "Error loading your data: ")
            return LoadResult(success=False, reason=e.reason, error=e.message)
        except StaleSessionError as e:
            logger.info(e.message)
            return LoadResult(success=False, reason=e.reason, error=e.message)
        except VersePointError as e:
            report_error(self._presenter, e)
            return LoadResult(success=False, reason=e.reason, error=e.message)

        logger.info(f"Loaded {len(documents)} documents and {len(history)} messages")
        return LoadResult(
            success=True,
            document_count=len(documents),
            message_count=len(history),
        )

    async def submit(self, files: Iterable[LocalFile]) -> SubmitResult:
        """Validate and upload a batch of files concurrently.

        Args:
            files: Files picked by the user.

        Returns:
            SubmitResult listing rejected names, uploaded documents and failures.
        """
        files = list(files)
        accepted = [f for f in files if is_supported(f)]
        rejected = [f.name for f in files if not is_supported(f)]

        if not self._session.is_authenticated:
            error = AuthenticationError("Please log in to upload files")
            report_error(self._presenter, error)
            return SubmitResult(
                success=False, reason=error.reason, error=error.message, rejected=rejected
            )

        for name in rejected:
            notify(
                self._presenter,
                NoticeLevel.WARNING,
                f"{name} is not a supported file type (PDF, MD, HTML)",
                FailureReason.UNSUPPORTED_FILE_TYPE,
            )

        if not accepted:
            error = InputValidationError(
                "Please select valid files (PDF, MD, HTML)",
                FailureReason.UNSUPPORTED_FILE_TYPE,
            )
            report_error(self._presenter, error)
            return SubmitResult(
                success=False, reason=error.reason, error=error.message, rejected=rejected
            )

        epoch = self._session.epoch
        outcomes = await asyncio.gather(
            *(self._upload_one(f, epoch) for f in accepted),
            return_exceptions=True,
        )

        result = SubmitResult(success=True, rejected=rejected)
        for file, outcome in zip(accepted, outcomes):
            if isinstance(outcome, Document):
                result.uploaded.append(outcome)
            elif isinstance(outcome, BaseException):
                logger.error(f"Upload of {file.name} aborted: {outcome!r}")
                result.failed[file.name] = str(outcome) or "Upload failed"
            else:
                result.failed[file.name] = outcome
        if result.failed:
            result.success = False
            result.reason = FailureReason.API_ERROR
            result.error = f"{len(result.failed)} of {len(accepted)} uploads failed"
        return result

    async def _upload_one(self, file: LocalFile, epoch: int) -> Document | str:
        """Upload one file and merge the result.

        Returns:
            The new document, or the error message on failure.
        """
        self._presenter.emit(UploadStarted(filename=file.name, size=file.size))
        self._presenter.emit(UploadProgress(filename=file.name, percent=None))

        def on_progress(percent: int) -> None:
            self._presenter.emit(UploadProgress(filename=file.name, percent=percent))

        try:
            payload = await self._gateway.upload(UPLOAD_PATH, file, on_progress)
            try:
                document = Document.model_validate(payload.get("document"))
            except ValidationError as e:
                raise ApiError(200, "Server returned an invalid document record") from e
            self._session.prepend_document(document, epoch)
        except StaleSessionError as e:
            logger.info(e.message)
            notify(self._presenter, NoticeLevel.WARNING, e.message, e.reason)
            self._presenter.emit(
                UploadFailed(filename=file.name, message=e.message, reason=e.reason)
            )
            return e.message
        except VersePointError as e:
            logger.warning(f"Upload of {file.name} failed: {e}")
            self._presenter.emit(
                UploadFailed(filename=file.name, message=e.message, reason=e.reason)
            )
            return e.message
        except Exception as e:
            logger.exception(f"Unexpected error uploading {file.name}")
            self._presenter.emit(
                UploadFailed(filename=file.name, message=str(e), reason=FailureReason.API_ERROR)
            )
            return str(e) or "Upload failed"

        logger.info(f"Uploaded {file.name} as document {document.id}")
        # Already merged, so reporting failures are only logged
        try:
            self._presenter.emit(UploadProgress(filename=file.name, percent=100))
            self._presenter.emit(UploadSucceeded(filename=file.name, document=document))
        except Exception:
            logger.exception(f"Could not report upload of {file.name}")
        return document
