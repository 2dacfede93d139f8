"""Report configuration management using Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


ROOT = Path(__file__).resolve().parents[1]
ARGB_LENGTH = 8


class ReportSettings(BaseSettings):
    locale: str = "ka"
    default_sheet_title: str = "Tasks"
    generic_document_name: str = "work-excel"

    index_header: str = "#"
    organization_header: str = "დასახელება"
    websites_header: str = "პორტალები"
    deadline_label: str = "შესრულების დრო"
    title_separator: str = " / "

    absent_text: str = "-----"
    absent_fill: str = "FFFFFFFF"
    done_fill: str = "FF00FF00"
    pending_fill: str = "FFFFFF00"

    width_padding: int = Field(default=5, ge=0)
    empty_header_width: int = Field(default=10, ge=0)
    organization_extra_padding: int = Field(default=5, ge=0)
    organization_padding_threshold: int = Field(default=10, ge=0)
    websites_width: int = Field(default=17, ge=1)
    title_merge_end_column: int = Field(default=9, ge=2)

    font_name: str = "Arial"
    title_font_size: int = 12
    header_font_size: int = 11
    row_height: float = 15
    title_row_height: float = 25
    header_row_height: float = 30

    fit_to_width: int = 7
    fit_to_height: int = 5

    @field_validator("absent_fill", "done_fill", "pending_fill")
    @classmethod
    def validate_argb(cls, value: str) -> str:
        cleaned = value.strip().lstrip("#").upper()
        if len(cleaned) == 6:
            cleaned = f"FF{cleaned}"
        if len(cleaned) != ARGB_LENGTH or any(ch not in "0123456789ABCDEF" for ch in cleaned):
            raise ValueError(f"Fill colour must be an RGB or ARGB hex string: {value!r}")
        return cleaned

    model_config = {
        "env_prefix": "REPORT_",
        "env_file": ROOT / ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_report_settings() -> ReportSettings:
    return ReportSettings()
