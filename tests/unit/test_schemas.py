"""Unit tests for wire models, the tagged message union and the model catalog."""

import pytest
from pydantic import ValidationError

from versepoint.models.catalog import AI_MODELS, get_model, get_model_by_name
from versepoint.models.schemas import (
    Answer,
    Document,
    DocumentStatus,
    DocumentType,
    LocalFile,
    Question,
    format_file_size,
    message_list_adapter,
)


class TestDocument:
    def test_parses_backend_record(self) -> None:
        """camelCase keys and lower-case types are accepted."""
        doc = Document.model_validate(
            {
                "id": 3,
                "filename": "notes.md",
                "type": "md",
                "size": 1536,
                "uploadDate": "2025-01-05",
                "status": "READY",
            }
        )

        assert doc.type == DocumentType.MD
        assert doc.status == DocumentStatus.READY
        assert doc.upload_date == "2025-01-05"
        assert doc.display_size == "1.5 KB"

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(ValidationError):
            Document(id=1, filename="a.docx", type="DOCX")

    def test_text_size_is_shown_as_is(self) -> None:
        doc = Document(id=1, filename="a.pdf", type="PDF", size="2.4 MB")

        assert doc.display_size == "2.4 MB"
        assert Document(id=2, filename="b.pdf", type="PDF").display_size == "Unknown size"


class TestMessages:
    """The transcript is a tagged union of Question and Answer."""

    def test_discriminates_by_type(self) -> None:
        messages = message_list_adapter.validate_python(
            [
                {"type": "question", "content": "Why?", "model": "claude"},
                {"type": "answer", "content": "Because.", "model": "claude", "source": "x.pdf"},
            ]
        )

        assert isinstance(messages[0], Question)
        assert isinstance(messages[1], Answer)
        assert messages[1].source == "x.pdf"

    def test_unknown_message_type_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            message_list_adapter.validate_python([{"type": "reply", "content": "?", "model": "claude"}])

    def test_messages_are_immutable(self) -> None:
        question = Question(content="Why?", model_id="claude")

        with pytest.raises(ValidationError):
            question.content = "Changed"

    @pytest.mark.parametrize("confidence", [-0.1, 1.01])
    def test_answer_confidence_bounds(self, confidence: float) -> None:
        with pytest.raises(ValidationError):
            Answer(content="a", model_id="claude", confidence=confidence)

    def test_source_list_is_joined(self) -> None:
        answer = Answer(content="a", model_id="claude", source=["a.pdf", "b.md"])

        assert answer.source == "a.pdf, b.md"

    def test_serializes_model_under_wire_name(self) -> None:
        question = Question(content="Why?", model_id="gemini")

        assert question.model_dump(by_alias=True)["model"] == "gemini"


class TestLocalFile:
    def test_from_path(self, tmp_path) -> None:
        path = tmp_path / "Report.PDF"
        path.write_bytes(b"%PDF-1.4")

        file = LocalFile.from_path(path)

        assert file.name == "Report.PDF"
        assert file.extension == "pdf"
        assert file.size == 8
        assert file.content_type == "application/pdf"

    def test_no_extension(self) -> None:
        assert LocalFile(name="Makefile", content=b"").extension == ""


class TestFormatFileSize:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [(0, "0 Bytes"), (500, "500 Bytes"), (1536, "1.5 KB"), (5 * 1024 * 1024, "5 MB")],
    )
    def test_formats(self, size: int, expected: str) -> None:
        assert format_file_size(size) == expected


class TestCatalog:
    def test_four_models(self) -> None:
        assert [m.id for m in AI_MODELS] == ["chatgpt5", "claude", "gemini", "perplexity"]

    def test_lookup_by_id_and_name(self) -> None:
        assert get_model("claude").name == "Claude"
        assert get_model_by_name("Perplexity").id == "perplexity"
        assert get_model("unknown") is None
