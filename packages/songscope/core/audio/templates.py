"""Key profiles and chord templates used as correlation targets.

Templates are 12-element tuples indexed by pitch class relative to the
root (index 0 = tonic/root). They are never mutated; ``rotate`` always
returns a fresh tuple.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from songscope.core.audio.models.enums import ChordQuality, Mode

# Tonic > dominant fifth > mode third > other diatonic degrees > chromatic.
# The two profiles hold the same weights and differ only in where the
# diatonic degrees sit, so neither mode is favoured by magnitude alone.
MAJOR_KEY_PROFILE: tuple[float, ...] = (
    20.0,  # I
    1.0,
    4.0,  # II
    1.0,
    10.0,  # III (major third)
    6.0,  # IV
    1.0,
    14.0,  # V
    1.0,
    4.0,  # VI
    1.0,
    3.0,  # VII
)
MINOR_KEY_PROFILE: tuple[float, ...] = (
    20.0,  # i
    1.0,
    4.0,  # ii
    10.0,  # III (minor third)
    1.0,
    6.0,  # iv
    1.0,
    14.0,  # v
    4.0,  # VI
    1.0,
    3.0,  # VII
    1.0,
)

CHORD_TEMPLATES: dict[ChordQuality, tuple[float, ...]] = {
    # root, major 3rd, perfect 5th
    ChordQuality.MAJOR: (1.0, 0, 0, 0, 1.0, 0, 0, 1.0, 0, 0, 0, 0),
    # root, minor 3rd, perfect 5th
    ChordQuality.MINOR: (1.0, 0, 0, 1.0, 0, 0, 0, 1.0, 0, 0, 0, 0),
    # root, minor 3rd, diminished 5th
    ChordQuality.DIMINISHED: (1.0, 0, 0, 1.0, 0, 0, 1.0, 0, 0, 0, 0, 0),
    # root, major 3rd, augmented 5th
    ChordQuality.AUGMENTED: (1.0, 0, 0, 0, 1.0, 0, 0, 0, 1.0, 0, 0, 0),
}


def rotate(template: Sequence[float], n: int) -> tuple[float, ...]:
    """Rotate a template so its index 0 moves to index ``n``.

    ``rotate(MAJOR_KEY_PROFILE, 9)`` is the A major profile in absolute
    pitch classes. Rotating 12 times by 1 returns the original.

    Args:
        template: Template values
        n: Number of semitones to rotate by (any integer)

    Returns:
        New rotated tuple
    """
    values = tuple(float(v) for v in template)
    if not values:
        return values
    shift = n % len(values)
    if shift == 0:
        return values
    return values[-shift:] + values[:-shift]


def _check_template(values: tuple[float, ...]) -> tuple[float, ...]:
    if len(values) != 12:
        raise ValueError(f"template must have 12 values, got {len(values)}")
    if any(v < 0 for v in values):
        raise ValueError("template values must be non-negative")
    if not any(v > 0 for v in values):
        raise ValueError("template must contain at least one positive value")
    return values


class KeyProfiles(BaseModel):
    """Major and minor key profiles, rooted on C."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    major: tuple[float, ...] = Field(default=MAJOR_KEY_PROFILE)
    minor: tuple[float, ...] = Field(default=MINOR_KEY_PROFILE)

    @field_validator("major", "minor")
    @classmethod
    def _validate_profile(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        return _check_template(value)

    def for_mode(self, mode: Mode) -> tuple[float, ...]:
        """Profile for the given mode."""
        return self.major if Mode(mode) is Mode.MAJOR else self.minor


class ChordTemplates(BaseModel):
    """Chord-quality templates, rooted on C."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    templates: dict[ChordQuality, tuple[float, ...]] = Field(
        default_factory=lambda: dict(CHORD_TEMPLATES)
    )

    @field_validator("templates")
    @classmethod
    def _validate_templates(
        cls, value: dict[ChordQuality, tuple[float, ...]]
    ) -> dict[ChordQuality, tuple[float, ...]]:
        if not value:
            raise ValueError("at least one chord template is required")
        for quality, template in value.items():
            try:
                _check_template(template)
            except ValueError as e:
                raise ValueError(f"{quality.value}: {e}") from e
        return value

    def items(self) -> list[tuple[ChordQuality, tuple[float, ...]]]:
        """(quality, template) pairs in declaration order."""
        return list(self.templates.items())
