"""Index statistics schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Type alias for supported index algorithms
IndexAlgo = Literal["kdtree", "linear"]


class MemoryUsage(BaseModel):
    """Schema for memory usage estimates in bytes."""

    model_config = ConfigDict(strict=True, extra="forbid")

    vectors: int = Field(..., ge=0, description="Bytes held by the vector collection")
    structure: int = Field(..., ge=0, description="Bytes held by the index structure")
    total: int = Field(..., ge=0, description="Sum of vectors and structure")

    @field_validator("total")
    @classmethod
    def validate_total(cls, v: int, info) -> int:
        if hasattr(info, "data") and {"vectors", "structure"} <= info.data.keys():
            if v != info.data["vectors"] + info.data["structure"]:
                raise ValueError("Total must equal vectors + structure")
        return v


class IndexStats(BaseModel):
    """Schema for index statistics."""

    model_config = ConfigDict(strict=True, extra="forbid")

    algorithm: IndexAlgo = Field(..., description="Index algorithm")
    name: str = Field(..., description="Human-readable index name")
    dimension: int = Field(..., ge=1, description="Dimensionality of indexed vectors")
    total_vectors: int = Field(..., ge=0, description="Number of indexed vectors")
    is_built: bool = Field(..., description="Whether the index has been built")
    tree_depth: int | None = Field(
        None, ge=0, description="Depth of the implicit tree (kd-tree only)"
    )
    partition: str | None = Field(
        None, description="Partitioning strategy used at build time (kd-tree only)"
    )
    build_duration: float | None = Field(
        None, ge=0.0, description="Build duration in seconds (if built)"
    )
    memory_usage_bytes: MemoryUsage
    complexity: dict[str, str] = Field(
        default_factory=dict, description="Asymptotic costs of build, query and space"
    )
