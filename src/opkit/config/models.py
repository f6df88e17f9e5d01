"""Pydantic models for the project configuration file."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, PlainValidator, field_validator

from opkit.plugin import MalformedVersionError, Version


def _parse_version(value: Any) -> Version:
    if isinstance(value, Version):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise ValueError(f"version must be a string, got {type(value).__name__}")
    try:
        return Version.parse(value)
    except MalformedVersionError as e:
        raise ValueError(str(e)) from e


ProjectVersion = Annotated[
    Version,
    PlainValidator(_parse_version),
    PlainSerializer(lambda v: str(v), return_type=str),
]


class ProjectConfig(BaseModel):
    """The parts of a ``PROJECT`` file the plugin engine consumes.

    Other sections (resources, per-plugin settings) are owned by the
    scaffolding machinery and ignored here.
    """

    model_config = ConfigDict(populate_by_name=True)

    version: ProjectVersion
    layout: list[str] = Field(default_factory=list)
    domain: str = ""
    repo: str = ""
    project_name: str = Field(default="", alias="projectName")

    @field_validator("layout", mode="before")
    @classmethod
    def _split_layout(cls, value: Any) -> Any:
        # Older files store the chain as a single comma-joined string.
        if isinstance(value, str):
            value = value.split(",")
        if value is None:
            return []
        if isinstance(value, list):
            # Non-string items are left for pydantic to reject.
            keys = [k.strip() if isinstance(k, str) else k for k in value]
            return [k for k in keys if k != ""]
        return value

    def get_version(self) -> Version:
        return self.version

    def get_plugin_chain(self) -> list[str]:
        """Plugin keys recorded when the project was initialized."""
        return list(self.layout)
