"""
FileBridge Pydantic models.

Defines the uniform operation result, I/O options, directory listing records
and the bridge configuration.
"""

import codecs
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


SUCCESS = "Success"


class IOMode(str, Enum):
    """How file bytes travel through the string-typed content channel."""
    TEXT = "Text"
    BINARY = "Binary"


class IOOptions(BaseModel):
    """Options for read/write operations."""
    mode: IOMode = Field(default=IOMode.TEXT)

    @classmethod
    def coerce(cls, value: Union["IOOptions", IOMode, str, Dict[str, Any], None]) -> "IOOptions":
        """
        Build options from whatever the caller handed over.

        Accepts an IOOptions, an IOMode, a mode name ("Text"/"Binary"),
        a dict like {"mode": "Binary"}, or None for the defaults.

        Raises:
            ValueError: If the mode is unknown
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls.model_validate(value)
        return cls(mode=IOMode(value))


class BridgeResult(BaseModel):
    """
    Outcome of a bridge operation.

    ``message`` carries an error description on failure. On success it holds
    whatever the operation produces: the "Success" marker, file content,
    a directory listing, a resolved path, or "true"/"false".
    """
    model_config = ConfigDict(frozen=True)

    ok: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, message: str = SUCCESS) -> "BridgeResult":
        """Create a successful result."""
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, message: str) -> "BridgeResult":
        """Create a failed result."""
        return cls(ok=False, message=message)

    def to_tuple(self) -> Tuple[bool, str]:
        """Convert to an (ok, message) tuple."""
        return (self.ok, self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")


class DirEntry(BaseModel):
    """One record of a directory listing."""
    name: str
    size: int = 0
    is_dir: bool = False

    def to_record(self) -> str:
        """Serialize as ``name,size,isDir``."""
        return f"{self.name},{self.size},{'true' if self.is_dir else 'false'}"

    @classmethod
    def from_record(cls, record: str) -> "DirEntry":
        """Parse a single ``name,size,isDir`` record."""
        # Names may contain commas, the last two fields never do
        name, size, is_dir = record.rsplit(",", 2)
        return cls(name=name, size=int(size), is_dir=is_dir == "true")

    @classmethod
    def parse_listing(cls, message: str) -> List["DirEntry"]:
        """Parse the payload of a successful directory listing."""
        if not message:
            return []
        return [cls.from_record(record) for record in message.split("|")]


class BridgeConfig(BaseModel):
    """FileBridge configuration."""
    base_path: Optional[str] = Field(
        default=None,
        description="Root for resolving relative paths (None = working directory)"
    )
    text_encoding: str = Field(default="utf-8", description="Encoding used in Text mode")
    copy_chunk_size: int = Field(default=64 * 1024, ge=1, le=64 * 1024 * 1024)
    cleanup_partial_extraction: bool = Field(
        default=False,
        description="Remove files written by a ZIP extraction that fails part way"
    )

    @field_validator("text_encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown text encoding: {value}")
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BridgeConfig":
        """Create from dict."""
        return cls.model_validate(data)
