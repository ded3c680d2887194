from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from socialrelay.services.captions import (
    CaptionGenerator,
    WARNING_API_ERROR,
    WARNING_PADDED,
    WARNING_PROCESSING_ERROR,
    fallback_captions,
    parse_captions,
)


def _completion(text):
    message = SimpleNamespace(content=text)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _generator(create: AsyncMock) -> CaptionGenerator:
    client = MagicMock()
    client.chat.completions.create = create
    return CaptionGenerator(client, "openai/o4-mini")


class TestParseCaptions:
    def test_strips_numbering_and_blank_lines(self) -> None:
        text = "1. First\n\n2) Second\n3.Third\n   \n4. Fourth\n5. Fifth\n6. Sixth"

        assert parse_captions(text) == ["First", "Second", "Third", "Fourth", "Fifth"]

    def test_numbering_only_lines_do_not_use_up_a_slot(self) -> None:
        text = "1. First\n2. Second\n3.\n4. Fourth\n5. Fifth\n6. Sixth"

        assert parse_captions(text) == ["First", "Second", "Fourth", "Fifth", "Sixth"]

    def test_empty_text(self) -> None:
        assert parse_captions("") == []
        assert parse_captions(None) == []


class TestCaptionGenerator:
    async def test_returns_five_generated_captions(self):
        # Arrange
        create = AsyncMock(return_value=_completion("1. a\n2. b\n3. c\n4. d\n5. e"))
        generator = _generator(create)

        # Act
        result = await generator.generate("coffee")

        # Assert
        assert result.captions == ["a", "b", "c", "d", "e"]
        assert result.warning is None
        kwargs = create.await_args.kwargs
        assert kwargs["model"] == "openai/o4-mini"
        assert [m["role"] for m in kwargs["messages"]] == ["developer", "user"]
        assert "coffee" in kwargs["messages"][1]["content"]

    async def test_api_error_falls_back(self):
        create = AsyncMock(side_effect=RuntimeError("service unavailable"))
        generator = _generator(create)

        result = await generator.generate("coffee")

        assert result.captions == fallback_captions("coffee")
        assert result.warning == WARNING_API_ERROR
        create.assert_awaited_once()

    async def test_unparseable_answer_falls_back(self):
        generator = _generator(AsyncMock(return_value=_completion("\n  \n")))

        result = await generator.generate("coffee")

        assert result.captions == fallback_captions("coffee")
        assert result.warning == WARNING_PROCESSING_ERROR

    async def test_bare_number_line_with_enough_captions_is_not_padded(self):
        generator = _generator(AsyncMock(return_value=_completion("1. a\n2. b\n3.\n4. d\n5. e\n6. f")))

        result = await generator.generate("tea")

        assert result.captions == ["a", "b", "d", "e", "f"]
        assert result.warning is None

    async def test_short_answer_is_padded_to_five(self):
        generator = _generator(AsyncMock(return_value=_completion("1. only one\n2. and two")))

        result = await generator.generate("tea")

        assert len(result.captions) == 5
        assert result.captions[:2] == ["only one", "and two"]
        assert result.captions[2:] == fallback_captions("tea")[2:]
        assert result.warning == WARNING_PADDED
