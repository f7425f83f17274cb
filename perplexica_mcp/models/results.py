"""Result models parsed from Perplexica responses."""

from pydantic import BaseModel, ConfigDict, Field


class SourceMetadata(BaseModel):
    """Title and location of a source document."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Source title")
    url: str = Field(..., description="Source URL")


class Source(BaseModel):
    """A document the answer was synthesized from."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page_content: str = Field(
        ..., alias="pageContent", description="Extracted page content"
    )
    metadata: SourceMetadata


class SearchResult(BaseModel):
    """Response of ``POST /api/search``."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(
        ..., description="Synthesized answer, possibly with citation markers"
    )
    sources: list[Source] = Field(..., description="Sources in citation order")


class Model(BaseModel):
    """A chat or embedding model offered by a provider."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name")
    key: str = Field(..., description="Key used to select the model in a search")


class Provider(BaseModel):
    """A model provider configured on the Perplexica instance."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    chat_models: list[Model] = Field(..., alias="chatModels")
    embedding_models: list[Model] = Field(..., alias="embeddingModels")


class ProvidersResult(BaseModel):
    """Response of ``GET /api/providers``."""

    model_config = ConfigDict(frozen=True)

    providers: list[Provider]

    def to_pretty_json(self) -> str:
        """Serialize with backend field names and two-space indentation."""
        return self.model_dump_json(by_alias=True, indent=2)
