"""Pydantic schemas for the analyze endpoints.

Request bodies use the camelCase keys the web client sends. Responses are
the engine's own `to_dict()` output and are returned as plain dicts.
"""

from typing import Optional

from pydantic import BaseModel, Field

CODE_SOURCES = {"input", "upload"}


class SourceFile(BaseModel):
    """One uploaded source file."""

    name: str = Field(min_length=1)
    content: str


class AnalyzeRequest(BaseModel):
    """Payload for POST /analyze and POST /analyze/stream.

    `codeSource` selects the input: "input" analyses `code` as a single
    file, "upload" analyses every entry of `files`. Other values are
    rejected with 400 by the service layer rather than 422, matching the
    other input errors.
    """

    model_config = {"populate_by_name": True}

    code_source: str = Field(alias="codeSource")
    code: Optional[str] = None
    filename: Optional[str] = None
    files: list[SourceFile] = Field(default_factory=list)
    package_json: Optional[str] = Field(default=None, alias="packageJson")
    project_name: Optional[str] = Field(default=None, alias="projectName")


class BundleRequest(BaseModel):
    """Payload for POST /analyze/bundle."""

    content: str
    files: list[SourceFile] = Field(default_factory=list)
