"""Pipeline settings."""

import os
from typing import ClassVar, Literal

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .formats import DEFAULT_FORMAT, get_pil_format

ENV_PREFIX = "CL_IMAGE_PIPELINE_"

ResampleName = Literal["nearest", "bilinear", "bicubic", "lanczos"]

_RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


class PipelineSettings(BaseModel):
    """Settings shared by every stage of an ImagePipeline.

    Attributes:
        default_format: Format written when a call passes none
        final_quality: Quality of the last encode in ``process``
        resample: Interpolation used when scaling
        single_pass: Decode once and encode once in ``process`` instead of
            round-tripping through the codec after every stage
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    default_format: str = Field(default=DEFAULT_FORMAT.value)
    final_quality: int = Field(default=100, ge=0, le=100)
    resample: ResampleName = "bicubic"
    single_pass: bool = False

    @field_validator("default_format")
    @classmethod
    def normalize_format(cls, v: str) -> str:
        return get_pil_format(v)

    @property
    def resample_filter(self) -> Image.Resampling:
        return _RESAMPLE_FILTERS[self.resample]

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        """Build settings from ``CL_IMAGE_PIPELINE_*`` environment variables."""
        values: dict[str, str] = {}
        for field_name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + field_name.upper())
            if raw is not None:
                values[field_name] = raw.strip()
        return cls.model_validate(values)
