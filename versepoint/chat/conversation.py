"""Single-flight question answering.

Only one question may be outstanding at a time. The question is appended to
the transcript and the guard taken before the first suspension point; the
guard and the thinking indicator are released on every exit path.
"""

import logging

from pydantic import ValidationError

from versepoint.api.gateway import ApiGateway
from versepoint.errors import (
    ApiError,
    ConcurrencyError,
    FailureReason,
    InputValidationError,
    StaleSessionError,
    VersePointError,
)
from versepoint.models.events import NoticeLevel, ThinkingStarted, ThinkingStopped
from versepoint.models.schemas import Answer, AskResult, ChatReply, Question
from versepoint.session.state import SessionState
from versepoint.ui.presenter import Presenter, notify, report_error

logger = logging.getLogger(__name__)

CHAT_PATH = "/chat"


class ConversationManager:
    """Turns user questions into chat requests and merges the answers."""

    def __init__(
        self,
        session: SessionState,
        gateway: ApiGateway,
        presenter: Presenter,
    ) -> None:
        self._session = session
        self._gateway = gateway
        self._presenter = presenter

    def _check_preconditions(self, question: str) -> None:
        if self._session.is_answering:
            raise ConcurrencyError("Please wait for the current answer")
        self._session.require_token()
        if not question:
            raise InputValidationError("Please enter a question", FailureReason.EMPTY_QUESTION)
        if not self._session.documents:
            raise InputValidationError(
                "Please upload some documents first", FailureReason.NO_DOCUMENTS
            )

    async def ask(self, question: str) -> AskResult:
        """Ask the backend a question about the uploaded documents.

        Args:
            question: User's question; surrounding whitespace is ignored.

        Returns:
            AskResult with the appended Answer on success, or the reason the
            question was refused or failed.
        """
        question = question.strip()
        try:
            self._check_preconditions(question)
        except VersePointError as e:
            report_error(self._presenter, e)
            return AskResult(success=False, reason=e.reason, error=e.message)

        epoch = self._session.epoch
        model_id = self._session.active_model_id
        self._session.begin_answering()
        try:
            self._session.append_message(Question(content=question, model_id=model_id), epoch)
            self._presenter.emit(ThinkingStarted(model_id=model_id))
            answer = await self._request_answer(question, model_id)
            self._session.append_message(answer, epoch)
        except StaleSessionError as e:
            logger.info(e.message)
            notify(self._presenter, NoticeLevel.WARNING, e.message, e.reason)
            return AskResult(success=False, reason=e.reason, error=e.message)
        except VersePointError as e:
            logger.warning(f"Chat request failed: {e}")
            report_error(self._presenter, e, "Chat error: ")
            return AskResult(success=False, reason=e.reason, error=e.message)
        except Exception as e:
            logger.exception("Unexpected error while answering")
            notify(self._presenter, NoticeLevel.ERROR, f"Chat error: {e}", FailureReason.API_ERROR)
            return AskResult(success=False, reason=FailureReason.API_ERROR, error=str(e))
        finally:
            try:
                self._presenter.emit(ThinkingStopped())
            finally:
                self._session.end_answering()

        return AskResult(success=True, answer=answer)

    async def _request_answer(self, question: str, model_id: str) -> Answer:
        payload = await self._gateway.request(
            CHAT_PATH,
            method="POST",
            body={"message": question, "model": model_id},
        )
        try:
            reply = ChatReply.model_validate(payload)
        except ValidationError as e:
            raise ApiError(200, "Server returned an invalid answer") from e
        return Answer(
            content=reply.answer,
            source=reply.sources,
            confidence=reply.confidence,
            model_id=model_id,
        )
