"""Query models."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_FOCUS_MODE = "webSearch"
OPTIMIZATION_MODE = "speed"


class SearchRequest(BaseModel):
    """A search submitted through the search tool."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., min_length=1, description="The search query text")
    focus_mode: str = Field(
        DEFAULT_FOCUS_MODE,
        description="The focus mode for search (e.g., 'webSearch', 'academicSearch')",
    )
    stream: bool = Field(False, description="Whether to stream the response")
    history: list[tuple[str, str]] | None = Field(
        None, description="Chat history as (role, message) pairs"
    )
    system_instructions: str | None = Field(
        None, description="System instructions for search"
    )
    provider_id: str | None = Field(None, description="Provider ID override")
    chat_model_key: str | None = Field(None, description="Chat model key override")
    embedding_model_key: str | None = Field(
        None, description="Embedding model key override"
    )


class ResolvedIdentifiers(BaseModel):
    """Provider and model identifiers after applying configured defaults."""

    model_config = ConfigDict(frozen=True)

    provider_id: str
    chat_model_key: str
    embedding_model_key: str


class ModelSelection(BaseModel):
    """A (provider, model key) pair as the backend expects it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider_id: str = Field(..., alias="providerId")
    key: str


class BackendSearchPayload(BaseModel):
    """Body of ``POST /api/search``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    chat_model: ModelSelection = Field(..., alias="chatModel")
    embedding_model: ModelSelection = Field(..., alias="embeddingModel")
    optimization_mode: str = Field(OPTIMIZATION_MODE, alias="optimizationMode")
    focus_mode: str = Field(..., alias="focusMode")
    query: str
    history: list[tuple[str, str]] | None = None
    system_instructions: str | None = Field(None, alias="systemInstructions")
    stream: bool = False

    @classmethod
    def build(
        cls, request: SearchRequest, identifiers: ResolvedIdentifiers
    ) -> "BackendSearchPayload":
        """Build the payload for a request.

        The one provider id governs both the chat and the embedding model.
        """
        return cls(
            chat_model=ModelSelection(
                provider_id=identifiers.provider_id,
                key=identifiers.chat_model_key,
            ),
            embedding_model=ModelSelection(
                provider_id=identifiers.provider_id,
                key=identifiers.embedding_model_key,
            ),
            focus_mode=request.focus_mode,
            query=request.query,
            history=request.history,
            system_instructions=request.system_instructions,
            stream=request.stream,
        )

    def to_json_body(self) -> dict:
        """Return the wire representation, keeping absent optionals as null."""
        return self.model_dump(mode="json", by_alias=True)
