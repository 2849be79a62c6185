"""Configuration for member discipline."""

from member_discipline.config.discipline_config import (
    DEFAULT_DISCIPLINE_CONFIG,
    DisciplineConfig,
)

__all__: list[str] = ["DEFAULT_DISCIPLINE_CONFIG", "DisciplineConfig"]
