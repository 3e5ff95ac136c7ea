"""Fixed catalog of answer-generation models the backend accepts."""

from pydantic import BaseModel, ConfigDict, Field


class ModelDescriptor(BaseModel):
    """A selectable backend model.

    Attributes:
        id: Wire identifier sent with each chat request.
        name: Human-readable name, also stored in the ``defaultModel`` preference.
        description: One-line summary for model pickers.
        capabilities: Short capability labels.
        speed: Relative speed label.
        accuracy: Relative accuracy label.
        icon: Emoji shown next to answers.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    capabilities: tuple[str, ...] = Field(default_factory=tuple)
    speed: str
    accuracy: str
    icon: str


AI_MODELS: tuple[ModelDescriptor, ...] = (
    ModelDescriptor(
        id="chatgpt5",
        name="ChatGPT-5",
        description="OpenAI's most advanced language model with superior reasoning and multimodal capabilities",
        capabilities=("Advanced reasoning", "Code generation", "Complex analysis", "Creative writing"),
        speed="Fast",
        accuracy="Highest",
        icon="🤖",
    ),
    ModelDescriptor(
        id="claude",
        name="Claude",
        description="Anthropic's constitutional AI with excellent safety and helpfulness",
        capabilities=("Safety-focused", "Long context", "Detailed analysis", "Ethical reasoning"),
        speed="Medium",
        accuracy="Very High",
        icon="🎭",
    ),
    ModelDescriptor(
        id="gemini",
        name="Gemini",
        description="Google's multimodal AI with strong integration and search capabilities",
        capabilities=("Multimodal", "Search integration", "Real-time data", "Visual analysis"),
        speed="Fast",
        accuracy="High",
        icon="💎",
    ),
    ModelDescriptor(
        id="perplexity",
        name="Perplexity",
        description="Research-focused AI with real-time web access and citation capabilities",
        capabilities=("Web search", "Real-time info", "Citations", "Research focus"),
        speed="Medium",
        accuracy="High",
        icon="🔍",
    ),
)

DEFAULT_MODEL_ID = "chatgpt5"

_BY_ID = {model.id: model for model in AI_MODELS}
_BY_NAME = {model.name: model for model in AI_MODELS}


def get_model(model_id: str) -> ModelDescriptor | None:
    return _BY_ID.get(model_id)


def get_model_by_name(name: str) -> ModelDescriptor | None:
    return _BY_NAME.get(name)


def model_names() -> tuple[str, ...]:
    return tuple(model.name for model in AI_MODELS)
